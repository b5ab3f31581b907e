from __future__ import annotations

from evalsys.core.constants import STATE_ORDER, EvaluationState
from evalsys.core.errors import InvalidArgumentError


def is_deleted(state: EvaluationState | str | None) -> bool:
    return state is not None and EvaluationState(state) is EvaluationState.DELETED


def state_index(state: EvaluationState | str | None) -> int:
    """
    Position of a state in the lifecycle order.
    An unset state sorts before PARTIAL; DELETED has no position.
    """
    if state is None:
        return -1
    state = EvaluationState(state)
    if state is EvaluationState.DELETED:
        raise InvalidArgumentError("DELETED has no position in the lifecycle order", "state")
    return STATE_ORDER.index(state)


def is_after(
    state: EvaluationState | str | None,
    reference: EvaluationState | str,
    or_equal: bool = False,
) -> bool:
    """True when `state` comes after `reference` (or is it, with or_equal)."""
    idx, ref = state_index(state), state_index(reference)
    return idx >= ref if or_equal else idx > ref


def is_before(
    state: EvaluationState | str | None,
    reference: EvaluationState | str,
    or_equal: bool = False,
) -> bool:
    """True when `state` comes before `reference` (or is it, with or_equal)."""
    idx, ref = state_index(state), state_index(reference)
    return idx <= ref if or_equal else idx < ref


def reached(state: EvaluationState | str | None, reference: EvaluationState) -> bool:
    """At or after `reference`; unset and DELETED states never reach anything."""
    if state is None or is_deleted(state):
        return False
    return is_after(state, reference, or_equal=True)
