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

import os
from typing import Optional

import yaml

from kubewalk.errors import ConfigError
from kubewalk.flatten import FlattenOptions

CONFIG_ENV = "KUBEWALK_CONFIG"
DEFAULT_NAMESPACE = "default"

# Fields maintained by the API server, stripped by --pure
AUTO_GENERATED_KEYS = frozenset({
    "creationTimestamp",
    "resourceVersion",
    "generation",
    "uid",
    "managedFields",
    "selfLink",
    "status",  # skip whole status subtree
})

SETTINGS_TYPES = {
    "namespace": str,
    "kubeconfig": str,
    "context": str,
    "depth": int,
    "prune": list,
    "pure": bool,
    "absolute": bool,
    "request_timeout": (int, float),
}


def default_config_path() -> Optional[str]:
    return os.getenv(CONFIG_ENV) or None


def load_settings(path: Optional[str]) -> dict:
    """
    Read settings from a YAML file. Missing path means no settings.
    Example:
        namespace: d8-sds-replicated-volume
        depth: 3
        pure: true
        prune: [annotations, labels]
    :rtype: :py:class:`dict`
    """
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            settings = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"error reading config {path}: {e.strerror}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid config {path}: {e}") from e

    if settings is None:
        return {}
    if not isinstance(settings, dict):
        raise ConfigError(f"invalid config {path}: expected a mapping")

    for key, value in settings.items():
        expected = SETTINGS_TYPES.get(key)
        if expected is None:
            raise ConfigError(f"invalid config {path}: unknown setting {key!r}")
        # bool is an int subclass, `depth: true` is still a mistake
        if not isinstance(value, expected) or (expected is not bool and isinstance(value, bool)):
            raise ConfigError(f"invalid config {path}: {key} has wrong type {type(value).__name__}")
    if not all(isinstance(key, str) for key in settings.get("prune", [])):
        raise ConfigError(f"invalid config {path}: prune must be a list of strings")
    return settings


def build_options(depth: Optional[int] = None, prune=(), pure: bool = False) -> FlattenOptions:
    prune_keys = set(prune)
    if pure:
        prune_keys |= AUTO_GENERATED_KEYS
    return FlattenOptions(max_depth=depth, prune_keys=frozenset(prune_keys))
