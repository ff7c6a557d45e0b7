# backend/tutordesk/domain/lesson_state.py
"""
Lesson status state machine.

    scheduled ──► confirmed ──► completed
        │             │
        └──► cancelled ◄┘

``completed`` and ``cancelled`` are terminal. Anything not listed in
``ALLOWED_TRANSITIONS`` is rejected, including re-setting the current status.
"""

from typing import Dict, FrozenSet, Union

from ..core.exceptions import InvalidTransitionException
from ..models.lesson import LessonStatus

ALLOWED_TRANSITIONS: Dict[LessonStatus, FrozenSet[LessonStatus]] = {
    LessonStatus.SCHEDULED: frozenset({LessonStatus.CONFIRMED, LessonStatus.CANCELLED}),
    LessonStatus.CONFIRMED: frozenset({LessonStatus.COMPLETED, LessonStatus.CANCELLED}),
    LessonStatus.COMPLETED: frozenset(),
    LessonStatus.CANCELLED: frozenset(),
}

TERMINAL_STATUSES = frozenset(
    status for status, targets in ALLOWED_TRANSITIONS.items() if not targets
)


def is_terminal(status: Union[LessonStatus, str]) -> bool:
    return LessonStatus(status) in TERMINAL_STATUSES


def can_transition(current: Union[LessonStatus, str], target: Union[LessonStatus, str]) -> bool:
    return LessonStatus(target) in ALLOWED_TRANSITIONS[LessonStatus(current)]


def ensure_transition(
    current: Union[LessonStatus, str], target: Union[LessonStatus, str]
) -> LessonStatus:
    """Return the target status, or raise InvalidTransitionException."""
    current_status = LessonStatus(current)
    target_status = LessonStatus(target)
    if target_status not in ALLOWED_TRANSITIONS[current_status]:
        raise InvalidTransitionException(current_status.value, target_status.value)
    return target_status
