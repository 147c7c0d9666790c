#
# Copyright 2026 Flant JSC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import logging

from kubewalk.document import DocumentNode, Mapping, Sequence
from kubewalk.errors import IndexOutOfRange, KeyNotFound
from kubewalk.paths import Field, Index

logger = logging.getLogger(__name__)


def resolve(root: DocumentNode, segments) -> DocumentNode:
    """
    Follow path segments from the root and return the node they point to.
    Stops at the first segment that cannot be applied.
    :param root: document root
    :param segments: Field and Index segments, usually from paths.parse
    :raises KeyNotFound: field missing or applied to a non-mapping node
    :raises IndexOutOfRange: index out of bounds, negative or applied to a non-sequence node
    """
    segments = tuple(segments)
    current = root
    for position, segment in enumerate(segments):
        resolved = segments[:position]
        if isinstance(segment, Field):
            child = current.get(segment.name) if isinstance(current, Mapping) else None
            if child is None:
                raise KeyNotFound(segment.name, resolved)
        elif isinstance(segment, Index):
            if not isinstance(current, Sequence):
                raise IndexOutOfRange(segment.index, None, resolved)
            if segment.index < 0 or segment.index >= len(current.items):
                raise IndexOutOfRange(segment.index, len(current.items), resolved)
            child = current.items[segment.index]
        else:
            raise TypeError(f"unsupported path segment: {segment!r}")
        current = child

    logger.debug("resolved %d path segments", len(segments))
    return current
