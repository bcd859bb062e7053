import itertools

from katy.conditions import (
    current_condition_reason,
    current_condition_type,
    is_condition_true,
    resolve_current_condition,
)

T1 = "2024-03-01T10:00:00Z"
T2 = "2024-03-01T10:05:00Z"
T3 = "2024-03-01T10:10:00Z"


def cond(cond_type, status, ts, reason="", message=""):
    return {
        "type": cond_type,
        "status": status,
        "lastTransitionTime": ts,
        "reason": reason,
        "message": message,
    }


def test_empty_conditions():
    assert resolve_current_condition([]) == ("", "")


def test_no_true_condition_resolves_to_empty():
    conditions = [
        cond("Ready", "False", T2, "NotReady", "x"),
        cond("PodScheduled", "Unknown", T3, "Pending", "y"),
        cond("Initialized", "False", None),
    ]
    for perm in itertools.permutations(conditions):
        assert resolve_current_condition(list(perm)) == ("", "")


def test_single_true_condition():
    conditions = [cond("Initialized", "True", T1, "R1", "M1")]
    assert resolve_current_condition(conditions) == ("Initialized", "R1-M1")


def test_later_true_condition_wins():
    conditions = [
        cond("Initialized", "True", T1, "R1", "M1"),
        cond("Ready", "True", T2, "R2", "M2"),
    ]
    assert resolve_current_condition(conditions) == ("Ready", "R2-M2")


def test_order_independent_for_true_conditions():
    conditions = [
        cond("PodScheduled", "True", T1, "R0", "M0"),
        cond("Initialized", "True", T2, "R1", "M1"),
        cond("Ready", "True", T3, "R2", "M2"),
    ]
    for perm in itertools.permutations(conditions):
        assert resolve_current_condition(list(perm)) == ("Ready", "R2-M2")


def test_newer_false_condition_overrides_true():
    """
    Once a True condition is current, a newer condition replaces it
    whatever its status, in either input order.
    """
    conditions = [
        cond("Ready", "True", T2, "R2", "M2"),
        cond("Initialized", "False", T3, "R3", "M3"),
    ]
    for perm in itertools.permutations(conditions):
        assert resolve_current_condition(list(perm)) == ("Initialized", "R3-M3")


def test_older_false_condition_does_not_override():
    conditions = [
        cond("Ready", "True", T2, "R2", "M2"),
        cond("Initialized", "False", T1, "R1", "M1"),
    ]
    for perm in itertools.permutations(conditions):
        assert resolve_current_condition(list(perm)) == ("Ready", "R2-M2")


def test_mixed_statuses_order_independent():
    conditions = [
        cond("PodScheduled", "True", T1, "R0", "M0"),
        cond("Ready", "True", T2, "R2", "M2"),
        cond("ContainersReady", "False", T3, "R3", "M3"),
        cond("Initialized", "Unknown", None, "R4", "M4"),
    ]
    results = {resolve_current_condition(list(p)) for p in itertools.permutations(conditions)}
    assert results == {("ContainersReady", "R3-M3")}


def test_equal_timestamps_resolve_the_same_in_any_order():
    conditions = [
        cond("Ready", "True", T1, "R2", "M2"),
        cond("Initialized", "True", T1, "R1", "M1"),
    ]
    results = {resolve_current_condition(list(p)) for p in itertools.permutations(conditions)}
    # ties go to the type that sorts first
    assert results == {("Initialized", "R1-M1")}


def test_missing_reason_and_message():
    conditions = [{"type": "Ready", "status": "True", "lastTransitionTime": T1}]
    assert resolve_current_condition(conditions) == ("Ready", "-")


def test_true_condition_without_timestamp_can_be_replaced():
    conditions = [
        cond("PodScheduled", "True", None, "A", "a"),
        cond("Ready", "True", None, "B", "b"),
    ]
    # zero timestamp keeps the bootstrap open, the type sorting last is taken
    for perm in itertools.permutations(conditions):
        assert resolve_current_condition(list(perm)) == ("Ready", "B-b")


def test_helpers():
    conditions = [
        cond("Initialized", "True", T1, "R1", "M1"),
        cond("Ready", "False", T2, "R2", "M2"),
    ]
    assert current_condition_type(conditions) == "Ready"
    assert current_condition_reason(conditions) == "R2-M2"
    assert is_condition_true(conditions, "Initialized")
    assert not is_condition_true(conditions, "Ready")
    assert not is_condition_true(conditions, "ContainersReady")
