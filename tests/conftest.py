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

import pytest
from kubernetes.client.exceptions import ApiException

from kubewalk.document import Mapping, Scalar, Sequence


class FakeInstance:
    def __init__(self, body: dict):
        self.body = body

    def to_dict(self) -> dict:
        return self.body


class FakeResource:
    """Stands in for kubernetes.dynamic.resource.Resource."""

    def __init__(self, kind, name, group="", api_version="v1", namespaced=True,
                 preferred=True, short_names=None, objects=None, error=None):
        self.kind = kind
        self.name = name
        self.singular_name = kind.lower()
        self.short_names = short_names or []
        self.group = group
        self.api_version = api_version
        self.namespaced = namespaced
        self.preferred = preferred
        self.objects = objects or {}
        self.error = error
        self.calls = []

    @property
    def group_version(self) -> str:
        return f"{self.group}/{self.api_version}" if self.group else self.api_version

    def get(self, name, namespace=None, _request_timeout=None):
        self.calls.append({"name": name, "namespace": namespace, "_request_timeout": _request_timeout})
        if self.error is not None:
            raise self.error
        body = self.objects.get((namespace, name))
        if body is None:
            raise ApiException(status=404, reason="Not Found")
        return FakeInstance(body)


class FakeDiscoverer:
    def __init__(self, resources, error=None):
        self.resources = resources
        self.error = error

    def search(self, **kwargs):
        if self.error is not None:
            raise self.error
        return list(self.resources)


class FakeClient:
    def __init__(self, *resources, discovery_error=None):
        self.resources = FakeDiscoverer(resources, error=discovery_error)


NGINX_POD = {
    "apiVersion": "v1",
    "kind": "Pod",
    "metadata": {
        "name": "nginx",
        "namespace": "default",
        "uid": "0c4f3a4e-1b7e-4b8e-9d5a-3f0e2b1c9a77",
        "resourceVersion": "4242",
        "labels": {"app": "nginx"},
    },
    "spec": {
        "containers": [
            {"name": "nginx", "image": "nginx:latest", "ports": [{"containerPort": 80}]},
        ],
        "restartPolicy": "Always",
    },
    "status": {"phase": "Running"},
}


@pytest.fixture
def pod_resource() -> FakeResource:
    return FakeResource("Pod", "pods", short_names=["po"], objects={("default", "nginx"): NGINX_POD})


@pytest.fixture
def fake_client(pod_resource) -> FakeClient:
    node_resource = FakeResource("Node", "nodes", namespaced=False, short_names=["no"],
                                 objects={(None, "worker-0"): {"kind": "Node", "metadata": {"name": "worker-0"}}})
    return FakeClient(pod_resource, node_resource)


@pytest.fixture
def containers_doc() -> Mapping:
    """{spec: {containers: [{name: nginx, image: nginx:latest}]}}"""
    container = Mapping((("name", Scalar("nginx")), ("image", Scalar("nginx:latest"))))
    return Mapping((("spec", Mapping((("containers", Sequence((container,))),))),))
