import json
from typing import Any

# ----------------------------
# Pod phases / condition values
# ----------------------------

PHASE_PENDING = "Pending"
PHASE_RUNNING = "Running"
PHASE_SUCCEEDED = "Succeeded"
PHASE_FAILED = "Failed"
PHASE_UNKNOWN = "Unknown"

CONDITION_TRUE = "True"
CONDITION_FALSE = "False"
CONDITION_UNKNOWN = "Unknown"

POD_READY = "Ready"

# ----------------------------
# Parsing utilities
# ----------------------------


def load_json(path: str) -> Any:
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def normalize_pods(doc: Any) -> list[dict[str, Any]]:
    """
    Accept a single Pod, a list of Pods or a `kind: List` document
    (as printed by `kubectl get pods -o json`).
    """
    if not doc:
        return []
    if isinstance(doc, list):
        return doc
    if doc.get("kind") in ("List", "PodList"):
        return doc.get("items", [])
    return [doc]


def get_pod_name(pod: dict[str, Any]) -> str:
    return pod.get("metadata", {}).get("name", "<unknown>")


def get_pod_namespace(pod: dict[str, Any]) -> str | None:
    return pod.get("metadata", {}).get("namespace")


def _status(pod: dict[str, Any]) -> dict[str, Any]:
    return pod.get("status") or {}


def get_pod_phase(pod: dict[str, Any]) -> str:
    return _status(pod).get("phase") or ""


def get_start_time(pod: dict[str, Any]) -> Any:
    return _status(pod).get("startTime")


def pod_conditions(pod: dict[str, Any]) -> list[dict[str, Any]]:
    return _status(pod).get("conditions") or []


def container_statuses(pod: dict[str, Any]) -> list[dict[str, Any]]:
    return _status(pod).get("containerStatuses") or []
