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
import sys

import yaml

from kubewalk.document import DocumentNode, Mapping, Scalar, Sequence
from kubewalk.errors import DecodeError

logger = logging.getLogger(__name__)

MAX_NESTING_DEPTH = 256
MAX_NODES = 1_000_000
NULL_TAG = "tag:yaml.org,2002:null"


def load_documents(stream) -> list[DocumentNode]:
    """
    Decode every YAML (or JSON) document of the stream.
    Scalars keep their source text, mapping keys keep their order.
    Empty documents are skipped.
    :param stream: str, bytes or an open file
    :rtype: :py:class:`list[DocumentNode]`
    """
    try:
        nodes = list(yaml.compose_all(stream, Loader=yaml.SafeLoader))
    except yaml.YAMLError as e:
        raise DecodeError(f"invalid YAML: {e}") from e
    except UnicodeDecodeError as e:
        raise DecodeError(f"invalid UTF-8 input: {e}") from e
    except RecursionError as e:
        raise DecodeError(f"document is nested deeper than {MAX_NESTING_DEPTH} levels") from e

    documents = []
    for node in nodes:
        if isinstance(node, yaml.ScalarNode) and node.tag == NULL_TAG and node.value == "":
            continue
        documents.append(from_yaml_node(node))
    logger.debug("decoded %d document(s)", len(documents))
    return documents


def load_file(path: str) -> list[DocumentNode]:
    """Decode a YAML file, `-` reads standard input."""
    if path == "-":
        return load_documents(sys.stdin)
    try:
        with open(path, "r", encoding="utf-8") as f:
            return load_documents(f)
    except OSError as e:
        raise DecodeError(f"error reading file {path}: {e.strerror}") from e
    except DecodeError as e:
        raise DecodeError(f"error reading file {path}: {e}") from e


def from_object(obj) -> DocumentNode:
    """
    Build a tree from plain Python data (dicts, lists, scalars), e.g. a fetched
    Kubernetes object. The data is serialized to YAML with sorted keys and read
    back, so scalars are rendered the same way as in a YAML file.
    """
    try:
        text = yaml.safe_dump(obj, sort_keys=True, default_flow_style=False, allow_unicode=True)
    except yaml.YAMLError as e:
        raise DecodeError(f"serialization error: {e}") from e
    documents = load_documents(text)
    if not documents:
        return Mapping()
    return documents[0]


def from_yaml_node(node: yaml.Node) -> DocumentNode:
    """
    Convert a composed YAML node into a document tree. Aliases are expanded,
    the number of produced nodes is capped by MAX_NODES.
    """
    return _Converter(MAX_NODES).convert(node, 0, frozenset())


class _Converter:
    def __init__(self, max_nodes: int):
        self.max_nodes = max_nodes
        self.count = 0

    def convert(self, node: yaml.Node, depth: int, active: frozenset) -> DocumentNode:
        if depth > MAX_NESTING_DEPTH:
            raise DecodeError(f"document is nested deeper than {MAX_NESTING_DEPTH} levels")
        if id(node) in active:
            raise DecodeError(f"recursive alias at line {node.start_mark.line + 1}")
        self.count += 1
        if self.count > self.max_nodes:
            raise DecodeError(f"document expands to more than {self.max_nodes} nodes")

        if isinstance(node, yaml.ScalarNode):
            return Scalar(node.value)

        active = active | {id(node)}
        if isinstance(node, yaml.SequenceNode):
            return Sequence(tuple(self.convert(item, depth + 1, active) for item in node.value))

        if isinstance(node, yaml.MappingNode):
            entries = []
            seen = set()
            for key_node, value_node in node.value:
                if not isinstance(key_node, yaml.ScalarNode):
                    raise DecodeError(f"unsupported non-scalar mapping key at line {key_node.start_mark.line + 1}")
                key = key_node.value
                if key in seen:
                    raise DecodeError(f"mapping key {key!r} already defined at line {key_node.start_mark.line + 1}")
                seen.add(key)
                entries.append((key, self.convert(value_node, depth + 1, active)))
            return Mapping(tuple(entries))

        raise DecodeError(f"unsupported YAML node {node!r}")
