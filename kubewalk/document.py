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
Document tree built from a decoded YAML or JSON document.

A tree is made of three node kinds: Scalar leaves holding the text of the
value as written, Sequence nodes holding ordered items and Mapping nodes
holding ordered (key, value) pairs. Nodes are immutable.
"""

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class Scalar:
    text: str


@dataclass(frozen=True)
class Sequence:
    items: tuple = ()

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class Mapping:
    entries: tuple = ()

    def __len__(self) -> int:
        return len(self.entries)

    def keys(self) -> list[str]:
        return [key for key, _ in self.entries]

    def get(self, key: str) -> Optional["DocumentNode"]:
        for entry_key, value in self.entries:
            if entry_key == key:
                return value
        return None


DocumentNode = Union[Scalar, Sequence, Mapping]
