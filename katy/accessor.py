import logging
from typing import Any

import urllib3
from kubernetes import client
from kubernetes.client.rest import ApiException

from katy.errors import ConfigurationError, PodNotPresent, TransportError
from katy.model import get_pod_namespace, get_pod_name, load_json, normalize_pods

logger = logging.getLogger(__name__)


class ClusterAccessor:
    """
    Base class for anything that can fetch Pods from a cluster.

    get_pod() must raise PodNotPresent when the pod does not exist and
    TransportError for every other failure. Pods are returned as
    Kubernetes-shaped dicts (camelCase keys, RFC3339 timestamps).
    """

    def get_pod(self, namespace: str, name: str) -> dict[str, Any]:
        raise NotImplementedError

    def list_pods(self, namespace: str) -> list[dict[str, Any]]:
        raise NotImplementedError


# ----------------------------
# Live cluster
# ----------------------------


class KubernetesAccessor(ClusterAccessor):
    def __init__(self, core_api: client.CoreV1Api, request_timeout: float | None = None):
        self.core_api = core_api
        self.request_timeout = request_timeout

    def _call_kwargs(self) -> dict[str, Any]:
        if self.request_timeout is None:
            return {}
        return {"_request_timeout": self.request_timeout}

    def _to_dict(self, obj: Any) -> Any:
        return self.core_api.api_client.sanitize_for_serialization(obj)

    def get_pod(self, namespace: str, name: str) -> dict[str, Any]:
        logger.debug("reading pod %s/%s", namespace, name)
        try:
            pod = self.core_api.read_namespaced_pod(
                name, namespace, **self._call_kwargs()
            )
        except ApiException as e:
            if e.status == 404:
                raise PodNotPresent(namespace, name) from e
            raise TransportError(
                f"reading pod {namespace}/{name} failed: {e.status} {e.reason}", e
            ) from e
        except (urllib3.exceptions.HTTPError, OSError) as e:
            raise TransportError(f"reading pod {namespace}/{name} failed: {e}", e) from e
        return self._to_dict(pod)

    def list_pods(self, namespace: str) -> list[dict[str, Any]]:
        logger.debug("listing pods in %s", namespace)
        try:
            pod_list = self.core_api.list_namespaced_pod(
                namespace, **self._call_kwargs()
            )
        except ApiException as e:
            raise TransportError(
                f"listing pods in {namespace} failed: {e.status} {e.reason}", e
            ) from e
        except (urllib3.exceptions.HTTPError, OSError) as e:
            raise TransportError(f"listing pods in {namespace} failed: {e}", e) from e
        return [self._to_dict(p) for p in pod_list.items]


# ----------------------------
# Offline / test double
# ----------------------------


class InMemoryAccessor(ClusterAccessor):
    """
    Serves Pods from memory, keyed by (namespace, name).
    """

    def __init__(self, pods: list[dict[str, Any]] | None = None):
        self.pods: dict[tuple[str, str], dict[str, Any]] = {}
        self.failure: BaseException | None = None
        for pod in pods or []:
            self.add(pod)

    @classmethod
    def from_json(cls, path: str) -> "InMemoryAccessor":
        try:
            doc = load_json(path)
        except (OSError, ValueError) as e:
            raise ConfigurationError(f"cannot read pods from {path}: {e}") from e
        return cls(normalize_pods(doc))

    def add(self, pod: dict[str, Any]) -> None:
        namespace = get_pod_namespace(pod) or "default"
        self.pods[(namespace, get_pod_name(pod))] = pod

    def fail_with(self, exc: BaseException | None) -> None:
        self.failure = exc

    def _check_failure(self) -> None:
        if self.failure is not None:
            raise TransportError(str(self.failure), self.failure) from self.failure

    def get_pod(self, namespace: str, name: str) -> dict[str, Any]:
        self._check_failure()
        try:
            return self.pods[(namespace, name)]
        except KeyError:
            raise PodNotPresent(namespace, name) from None

    def list_pods(self, namespace: str) -> list[dict[str, Any]]:
        self._check_failure()
        return [pod for (ns, _), pod in self.pods.items() if ns == namespace]
