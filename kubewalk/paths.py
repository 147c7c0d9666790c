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
Path expressions.

A path is a dot-separated list of field names, each optionally followed by
one or more list indices in square brackets:

    spec.containers[0].image
    [1].name
    data.matrix[0][2]

The empty string is the root of the document.
"""

import re
from dataclasses import dataclass
from typing import Union

from kubewalk.errors import MalformedPath

TOKEN_RE = re.compile(r"(?P<name>[^\[\]]*)(?P<indices>(?:\[[^\[\]]*\])*)")
INDEX_RE = re.compile(r"\[([^\[\]]*)\]")
NUMBER_RE = re.compile(r"-?[0-9]+")


@dataclass(frozen=True)
class Field:
    name: str


@dataclass(frozen=True)
class Index:
    index: int


PathSegment = Union[Field, Index]


def parse(text: str) -> tuple:
    """
    Parse a path expression into a tuple of Field and Index segments.
    `name[i]` expands to Field(name) followed by Index(i).
    :raises MalformedPath: on unbalanced brackets, non-numeric indices or empty field names
    """
    if text == "":
        return ()

    segments = []
    for position, token in enumerate(text.split(".")):
        match = TOKEN_RE.fullmatch(token)
        if match is None:
            if token.count("[") != token.count("]"):
                raise MalformedPath(text, token, "unmatched bracket")
            raise MalformedPath(text, token, "misplaced bracket")

        name = match.group("name")
        indices = INDEX_RE.findall(match.group("indices"))
        if name == "":
            # only a leading token may start with an index, e.g. "[0].name"
            if position > 0 or not indices:
                raise MalformedPath(text, token, "empty field name")
        else:
            segments.append(Field(name))

        for index in indices:
            if not NUMBER_RE.fullmatch(index):
                raise MalformedPath(text, token, f"non-numeric index [{index}]")
            segments.append(Index(int(index)))

    return tuple(segments)
