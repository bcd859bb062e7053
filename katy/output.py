import json
from typing import Any

import yaml

# ----------------------------
# Output formatting
# ----------------------------

_LABELS = [
    ("phase", "Phase"),
    ("running", "Running"),
    ("ready", "Ready"),
    ("status", "Current condition"),
    ("reason", "Reason"),
    ("start_time", "Started"),
    ("containers_ready", "Containers ready"),
]


def _text_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value) if value != "" else "-"


def render_result(result: dict[str, Any], fmt: str = "text") -> str:
    """
    Render a pod report produced by PodQueries.describe().
    - json / yaml dump the report as-is
    - text prints one aligned line per field, then containers sorted by image
    """
    if fmt == "json":
        return json.dumps(result, indent=2)

    if fmt == "yaml":
        return yaml.safe_dump(result, sort_keys=False).rstrip("\n")

    lines = [f"Pod: {result['namespace']}/{result['pod']}"]
    width = max(len(label) for _, label in _LABELS)
    for key, label in _LABELS:
        lines.append(f"{label + ':':<{width + 1}} {_text_value(result[key])}")

    containers = result.get("containers", {})
    if containers:
        lines.append("\nContainers:")
        for image in sorted(containers):
            lines.append(f"  - {image}: {containers[image]}")

    return "\n".join(lines)


def output_result(result: dict[str, Any], fmt: str = "text") -> None:
    print(render_result(result, fmt))
