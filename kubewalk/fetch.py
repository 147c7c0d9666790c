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
from typing import Optional

import kubernetes
from kubernetes import dynamic
from kubernetes.client.exceptions import ApiException
from kubernetes.dynamic.exceptions import DynamicApiError
from kubernetes.dynamic.resource import ResourceList

from kubewalk.errors import FetchError

logger = logging.getLogger(__name__)

KIND_ALIASES = {
    "Pod": ["po", "pod", "pods"],
    "Service": ["svc", "service", "services"],
    "ConfigMap": ["cm", "configmap", "configmaps"],
    "Secret": ["secret", "secrets"],
    "Namespace": ["ns", "namespace", "namespaces"],
    "Node": ["no", "node", "nodes"],
    "Event": ["ev", "event", "events"],
    "ServiceAccount": ["sa", "serviceaccount", "serviceaccounts"],
    "Endpoints": ["ep", "endpoints"],
    "StorageClass": ["sc", "storageclass", "storageclasses"],
    "PersistentVolume": ["pv", "persistentvolume", "persistentvolumes"],
    "PersistentVolumeClaim": ["pvc", "persistentvolumeclaim", "persistentvolumeclaims"],
    "Deployment": ["deploy", "deployment", "deployments"],
    "StatefulSet": ["sts", "statefulset", "statefulsets"],
    "DaemonSet": ["ds", "daemonset", "daemonsets"],
    "ReplicaSet": ["rs", "replicaset", "replicasets"],
    "Job": ["job", "jobs"],
    "CronJob": ["cj", "cronjob", "cronjobs"],
    "Ingress": ["ing", "ingress", "ingresses"],
    "NetworkPolicy": ["netpol", "networkpolicy", "networkpolicies"],
    "EndpointSlice": ["endpointslice", "endpointslices"],
    "Role": ["role", "roles"],
    "RoleBinding": ["rb", "rolebinding", "rolebindings"],
    "ClusterRole": ["cr", "clusterrole", "clusterroles"],
    "ClusterRoleBinding": ["crb", "clusterrolebinding", "clusterrolebindings"],
    "HorizontalPodAutoscaler": ["hpa", "horizontalpodautoscaler", "horizontalpodautoscalers"],
}

_KIND_BY_ALIAS = {alias: kind for kind, aliases in KIND_ALIASES.items() for alias in aliases}


def resolve_kind(value: str) -> str:
    """Map a short name or plural (`po`, `deployments`) to its Kind, unknown input is returned as is."""
    return _KIND_BY_ALIAS.get(value.lower(), value)


def new_client(kubeconfig: Optional[str] = None,
               context: Optional[str] = None,
               in_cluster: bool = False) -> dynamic.DynamicClient:
    """
    Create a dynamic client. Without kubeconfig the client library default is used,
    which honours $KUBECONFIG and falls back to ~/.kube/config.
    """
    try:
        if in_cluster:
            kubernetes.config.load_incluster_config()
            api_client = kubernetes.client.ApiClient()
        else:
            api_client = kubernetes.config.new_client_from_config(config_file=kubeconfig, context=context)
        return dynamic.DynamicClient(api_client)
    except Exception as e:
        raise FetchError(f"error connecting Kubernetes: {e}") from e


def _names(resource) -> set:
    names = {resource.kind.lower(), (resource.name or "").lower(), (resource.singular_name or "").lower()}
    names.update(short_name.lower() for short_name in (resource.short_names or []))
    names.discard("")
    return names


def find_resource(client: dynamic.DynamicClient, kind: str):
    """
    Find the API resource serving `kind`. When several API groups serve the same
    kind the core group wins, then the preferred version.
    """
    resolved = resolve_kind(kind)
    wanted = resolved.lower()
    try:
        candidates = [resource for resource in client.resources.search()
                      if not isinstance(resource, ResourceList)
                      and "/" not in (resource.name or "")
                      and wanted in _names(resource)]
    except (ApiException, DynamicApiError) as e:
        raise FetchError(f"error resolving GVK for {kind}: {e.status} {e.reason}") from e
    except Exception as e:
        raise FetchError(f"error resolving GVK for {kind}: {e}") from e

    if not candidates:
        raise FetchError(f"error resolving GVK for {kind}: the server doesn't have a resource type {resolved!r}")

    candidates.sort(key=lambda resource: (resource.group != "", not resource.preferred))
    resource = candidates[0]
    logger.debug("resolved %s to %s, Kind=%s (%s)", kind, resource.group_version, resource.kind, resource.name)
    return resource


def fetch_object(client: dynamic.DynamicClient, kind: str, namespace: str, name: str,
                 request_timeout: Optional[float] = None) -> dict:
    """
    Get a single object by kind and name.
    Cluster scoped resources ignore the namespace.
    :rtype: :py:class:`dict`
    """
    resource = find_resource(client, kind)
    kwargs = {"name": name}
    if resource.namespaced:
        kwargs["namespace"] = namespace
    if request_timeout:
        kwargs["_request_timeout"] = request_timeout

    target = f"{namespace if resource.namespaced else ''}/{resource.kind}/{name} ({resource.group_version})"
    try:
        obj = resource.get(**kwargs)
    except (ApiException, DynamicApiError) as e:
        raise FetchError(f"error getting {target}: {e.status} {e.reason}") from e
    except Exception as e:
        raise FetchError(f"error getting {target}: {e}") from e

    logger.debug("fetched %s/%s", resource.kind, name)
    return obj.to_dict()
