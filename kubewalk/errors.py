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

from typing import Optional


class WalkError(Exception):
    """Base class for every error kubectl-walk reports to the user."""


class PathError(WalkError):
    """A path expression could not be parsed or resolved."""


class MalformedPath(PathError):
    def __init__(self, path: str, token: str, reason: str):
        self.path = path
        self.token = token
        self.reason = reason
        super().__init__(f"invalid path {path!r}: {reason} in {token!r}")


class KeyNotFound(PathError):
    """
    A field segment did not match any key of a mapping,
    or was applied to a node which is not a mapping.
    :param key: the field name that failed
    :param resolved: segments resolved before the failure
    """
    def __init__(self, key: str, resolved: tuple = ()):
        self.key = key
        self.resolved = resolved
        super().__init__(f"key {key} not found")


class IndexOutOfRange(PathError):
    """
    An index segment is outside the bounds of a sequence.
    :param index: the requested index
    :param length: length of the sequence, None when the node is not a sequence
    :param resolved: segments resolved before the failure
    """
    def __init__(self, index: int, length: Optional[int], resolved: tuple = ()):
        self.index = index
        self.length = length
        self.resolved = resolved
        if length is None:
            message = f"index [{index}] applied to a node which is not a list"
        else:
            message = f"index [{index}] out of range (length {length})"
        super().__init__(message)


class DecodeError(WalkError):
    """The input could not be turned into a document tree."""


class FetchError(WalkError):
    """The resource could not be read from the cluster."""


class ConfigError(WalkError):
    """The settings file is unreadable or invalid."""
