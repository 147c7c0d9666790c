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

"""Tests for resolving paths inside a document tree."""

import pytest

from kubewalk.document import Mapping, Scalar, Sequence
from kubewalk.errors import IndexOutOfRange, KeyNotFound
from kubewalk.navigator import resolve
from kubewalk.paths import Field, Index, parse


def test_resolve_empty_path_returns_root(containers_doc) -> None:
    assert resolve(containers_doc, parse("")) is containers_doc


def test_resolve_walks_fields_and_indices(containers_doc) -> None:
    assert resolve(containers_doc, parse("spec.containers[0].image")) == Scalar("nginx:latest")


def test_resolve_returns_subtree(containers_doc) -> None:
    containers = resolve(containers_doc, parse("spec.containers"))

    assert isinstance(containers, Sequence)
    assert len(containers) == 1


def test_resolve_reports_index_and_bound() -> None:
    doc = Mapping((("items", Sequence((Scalar("x"), Scalar("y")))),))

    with pytest.raises(IndexOutOfRange) as exc_info:
        resolve(doc, parse("items[5]"))

    assert exc_info.value.index == 5
    assert exc_info.value.length == 2
    assert exc_info.value.resolved == (Field("items"),)


def test_resolve_rejects_negative_index() -> None:
    doc = Mapping((("items", Sequence((Scalar("x"),))),))

    with pytest.raises(IndexOutOfRange) as exc_info:
        resolve(doc, (Field("items"), Index(-1)))

    assert exc_info.value.index == -1
    assert exc_info.value.length == 1


def test_resolve_index_on_mapping_fails(containers_doc) -> None:
    with pytest.raises(IndexOutOfRange) as exc_info:
        resolve(containers_doc, parse("spec[0]"))

    assert exc_info.value.length is None


def test_resolve_missing_key(containers_doc) -> None:
    with pytest.raises(KeyNotFound) as exc_info:
        resolve(containers_doc, parse("spec.volumes"))

    assert exc_info.value.key == "volumes"
    assert exc_info.value.resolved == (Field("spec"),)
    assert str(exc_info.value) == "key volumes not found"


def test_resolve_field_on_scalar_fails(containers_doc) -> None:
    with pytest.raises(KeyNotFound) as exc_info:
        resolve(containers_doc, parse("spec.containers[0].name.first"))

    assert exc_info.value.key == "first"


def test_resolve_field_on_sequence_fails(containers_doc) -> None:
    """Field lookup never falls back to numeric indexing."""

    with pytest.raises(KeyNotFound):
        resolve(containers_doc, parse("spec.containers.0"))


def test_resolve_key_match_is_exact() -> None:
    doc = Mapping((("Name", Scalar("upper")), ("name", Scalar("lower"))))

    assert resolve(doc, parse("name")) == Scalar("lower")
    with pytest.raises(KeyNotFound):
        resolve(doc, parse("NAME"))
