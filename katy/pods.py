import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from katy.accessor import ClusterAccessor
from katy.conditions import (
    current_condition_reason,
    current_condition_type,
    is_condition_true,
    resolve_current_condition,
)
from katy.config import DEFAULT_NAMESPACE
from katy.errors import ConfigurationError, TransportError
from katy.model import (
    PHASE_RUNNING,
    POD_READY,
    container_statuses,
    get_pod_name,
    get_pod_namespace,
    get_pod_phase,
    get_start_time,
    pod_conditions,
)
from katy.timeline import ZERO_TIME_STRING, format_time, parse_time

logger = logging.getLogger(__name__)


def _bool_str(value: bool) -> str:
    return "true" if value else "false"


@contextmanager
def _decoding(pod: dict[str, Any]) -> Iterator[None]:
    """
    Turn a malformed field (e.g. an unparsable timestamp) into a TransportError.
    """
    try:
        yield
    except (TypeError, ValueError) as e:
        pod_id = f"{get_pod_namespace(pod) or DEFAULT_NAMESPACE}/{get_pod_name(pod)}"
        logger.error("decoding pod %s: %s", pod_id, e)
        raise TransportError(f"cannot decode pod {pod_id}: {e}", e) from e


def start_time_string(pod: dict[str, Any]) -> str:
    start = get_start_time(pod)
    if not start:
        return ZERO_TIME_STRING
    with _decoding(pod):
        return format_time(parse_time(start))


def containers_ready(pod: dict[str, Any]) -> bool:
    return all(bool(c.get("ready")) for c in container_statuses(pod))


def container_ready_statuses(pod: dict[str, Any]) -> dict[str, str]:
    # Keyed by image: containers sharing an image collapse, last one wins.
    statuses: dict[str, str] = {}
    for c in container_statuses(pod):
        statuses[c.get("image", "")] = _bool_str(bool(c.get("ready")))
    return statuses


class PodQueries:
    """
    Point-in-time pod status queries.

    Every call fetches the pod again through the injected ClusterAccessor;
    nothing is cached between calls.
    """

    def __init__(self, accessor: ClusterAccessor | None = None):
        self.accessor = accessor

    def set_accessor(self, accessor: ClusterAccessor) -> None:
        self.accessor = accessor

    def _require_accessor(self) -> ClusterAccessor:
        if self.accessor is None:
            raise ConfigurationError("no cluster accessor configured")
        return self.accessor

    def _fetch(self, namespace: str | None, name: str) -> dict[str, Any]:
        accessor = self._require_accessor()
        namespace = namespace or DEFAULT_NAMESPACE
        try:
            return accessor.get_pod(namespace, name)
        except TransportError as e:
            logger.error("fetching pod %s/%s: %s", namespace, name, e)
            raise

    # ----------------------------
    # Namespace queries
    # ----------------------------

    def count_pods(self, namespace: str | None) -> int:
        accessor = self._require_accessor()
        namespace = namespace or DEFAULT_NAMESPACE
        try:
            return len(accessor.list_pods(namespace))
        except TransportError as e:
            logger.error("listing pods in %s: %s", namespace, e)
            raise

    # ----------------------------
    # Pod queries
    # ----------------------------

    def is_running(self, namespace: str | None, name: str) -> bool:
        return get_pod_phase(self._fetch(namespace, name)) == PHASE_RUNNING

    def is_ready(self, namespace: str | None, name: str) -> bool:
        pod = self._fetch(namespace, name)
        return is_condition_true(pod_conditions(pod), POD_READY)

    def get_phase(self, namespace: str | None, name: str) -> str:
        return get_pod_phase(self._fetch(namespace, name))

    def get_status(self, namespace: str | None, name: str) -> str:
        pod = self._fetch(namespace, name)
        with _decoding(pod):
            return current_condition_type(pod_conditions(pod))

    def get_condition_reason(self, namespace: str | None, name: str) -> str:
        pod = self._fetch(namespace, name)
        with _decoding(pod):
            return current_condition_reason(pod_conditions(pod))

    def get_start_time(self, namespace: str | None, name: str) -> str:
        return start_time_string(self._fetch(namespace, name))

    def are_containers_ready(self, namespace: str | None, name: str) -> bool:
        return containers_ready(self._fetch(namespace, name))

    def get_container_ready_statuses(
        self, namespace: str | None, name: str
    ) -> dict[str, str]:
        return container_ready_statuses(self._fetch(namespace, name))

    def describe(self, namespace: str | None, name: str) -> dict[str, Any]:
        """
        All of the above from a single fetch.
        """
        namespace = namespace or DEFAULT_NAMESPACE
        pod = self._fetch(namespace, name)
        conditions = pod_conditions(pod)
        with _decoding(pod):
            status, reason = resolve_current_condition(conditions)
        phase = get_pod_phase(pod)

        return {
            "pod": name,
            "namespace": namespace,
            "phase": phase,
            "running": phase == PHASE_RUNNING,
            "ready": is_condition_true(conditions, POD_READY),
            "status": status,
            "reason": reason,
            "start_time": start_time_string(pod),
            "containers_ready": containers_ready(pod),
            "containers": container_ready_statuses(pod),
        }
