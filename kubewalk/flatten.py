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

"""
Flatten a document tree into `path: value` lines.

Paths are dot-separated; list indices are appended in square brackets.
Scalar leaves are emitted as they are written in the source document.
Mappings and lists below the depth limit are emitted as a single
`<object>` or `<array>` line. Documents with multiple YAML documents
are supported; the document index is prefixed as docN. when needed.
"""

from dataclasses import dataclass, field
from typing import Callable, Iterator, Optional

from kubewalk.document import DocumentNode, Mapping, Sequence
from kubewalk.formatter import render_line
from kubewalk.navigator import resolve
from kubewalk.paths import Field, Index

OBJECT_PLACEHOLDER = "<object>"
ARRAY_PLACEHOLDER = "<array>"


@dataclass(frozen=True)
class FlattenOptions:
    """
    :param max_depth: number of mapping/list levels to descend, None or negative for no limit
    :param prune_keys: mapping keys whose whole subtree is skipped at any level
    """
    max_depth: Optional[int] = None
    prune_keys: frozenset = field(default_factory=frozenset)

    def __post_init__(self):
        object.__setattr__(self, "prune_keys", frozenset(self.prune_keys))

    @property
    def unlimited(self) -> bool:
        return self.max_depth is None or self.max_depth < 0


def iter_lines(node: DocumentNode, prefix=(), options: Optional[FlattenOptions] = None) -> Iterator[str]:
    if options is None:
        options = FlattenOptions()

    # pre-order walk with an explicit stack, children are pushed in reverse
    stack = [(node, tuple(prefix), None if options.unlimited else options.max_depth)]
    while stack:
        current, path, remain = stack.pop()

        if isinstance(current, Mapping):
            if remain == 0:
                yield render_line(path, OBJECT_PLACEHOLDER)
                continue
            next_remain = None if remain is None else remain - 1
            children = [(value, path + (Field(key),), next_remain)
                        for key, value in current.entries
                        if key not in options.prune_keys]
        elif isinstance(current, Sequence):
            if remain == 0:
                yield render_line(path, ARRAY_PLACEHOLDER)
                continue
            next_remain = None if remain is None else remain - 1
            children = [(item, path + (Index(idx),), next_remain)
                        for idx, item in enumerate(current.items)]
        else:
            # scalar leaf
            yield render_line(path, current.text)
            continue

        stack.extend(reversed(children))


def flatten(node: DocumentNode, prefix=(), options: Optional[FlattenOptions] = None,
            out: Callable[[str], object] = print) -> None:
    """
    Emit one line per scalar leaf (or per truncated subtree) of the node into `out`.
    :param prefix: path segments prepended to every emitted path
    :param out: line sink, any callable accepting a single string
    """
    for line in iter_lines(node, prefix, options):
        out(line)


def iter_documents(documents: list, segments=(), options: Optional[FlattenOptions] = None,
                   absolute: bool = False) -> Iterator[str]:
    """
    Resolve `segments` in every document and flatten from there.
    :param absolute: prefix lines with the resolved path instead of starting from an empty one
    """
    segments = tuple(segments)
    multi = len(documents) > 1
    for idx, root in enumerate(documents):
        start = resolve(root, segments)
        prefix = (Field(f"doc{idx}"),) if multi else ()
        if absolute:
            prefix += segments
        yield from iter_lines(start, prefix, options)
