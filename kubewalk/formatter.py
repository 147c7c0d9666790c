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

from kubewalk.paths import Field, Index


def render(segments) -> str:
    """
    Render path segments as a display path: fields are joined with dots,
    indices are attached to the previous token as `[i]`.
    Example: (Field("a"), Field("b"), Index(0), Field("c")) -> "a.b[0].c"
    """
    parts = []
    for segment in segments:
        if isinstance(segment, Index):
            parts.append(f"[{segment.index}]")
        elif isinstance(segment, Field):
            if parts:
                parts.append(".")
            parts.append(segment.name)
        else:
            raise TypeError(f"unsupported path segment: {segment!r}")
    return "".join(parts)


def render_line(segments, value: str) -> str:
    return f"{render(segments)}: {value}"
