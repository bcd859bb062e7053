from typing import Any

from katy.model import CONDITION_TRUE
from katy.timeline import ZERO_TIME, is_zero, parse_time


def condition_reason(condition: dict[str, Any]) -> str:
    return f"{condition.get('reason') or ''}-{condition.get('message') or ''}"


def _canonical_key(condition: dict[str, Any]) -> tuple:
    return (
        parse_time(condition.get("lastTransitionTime")),
        condition.get("type") or "",
        condition.get("status") or "",
        condition.get("reason") or "",
        condition.get("message") or "",
    )


def resolve_current_condition(conditions: list[dict[str, Any]]) -> tuple[str, str]:
    """
    Pick the pod's current condition and return (type, "reason-message").

    The first candidate must have status "True". Once a candidate exists,
    any condition with a strictly newer lastTransitionTime replaces it,
    whatever its status. With no "True" condition the result is ("", "").

    Conditions are walked oldest first (ties broken by type, status, reason
    and message) so the result does not depend on the input order.
    """
    best: dict[str, Any] | None = None
    best_time = ZERO_TIME

    for c in sorted(conditions, key=_canonical_key):
        ts = parse_time(c.get("lastTransitionTime"))

        if is_zero(best_time) and c.get("status") == CONDITION_TRUE:
            best, best_time = c, ts
        elif best is not None and best_time < ts:
            # NOTE: not gated on status, a newer False condition wins too
            best, best_time = c, ts

    if best is None:
        return "", ""
    return best.get("type") or "", condition_reason(best)


def current_condition_type(conditions: list[dict[str, Any]]) -> str:
    return resolve_current_condition(conditions)[0]


def current_condition_reason(conditions: list[dict[str, Any]]) -> str:
    return resolve_current_condition(conditions)[1]


def is_condition_true(conditions: list[dict[str, Any]], cond_type: str) -> bool:
    return any(
        c.get("type") == cond_type and c.get("status") == CONDITION_TRUE
        for c in conditions
    )
