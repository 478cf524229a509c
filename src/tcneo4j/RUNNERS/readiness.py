"""
Readiness predicates handed to testcontainers' log waiting.
"""
from typing import Callable, Iterable

from ..MODELS.wait_condition import WaitFor


def ready_predicate(conditions: Iterable[WaitFor]) -> Callable[[str], bool]:
    """
    Builds a predicate for testcontainers.core.waiting_utils.wait_for_logs.

    The predicate holds once every marker appears in the log text, each one
    after the previous marker.

    Args:
        conditions: Markers to wait for, in order.

    Returns:
        A callable taking the container's log text.
    """
    messages = [condition.message for condition in conditions]

    def predicate(text: str) -> bool:
        offset = 0
        for message in messages:
            index = text.find(message, offset)
            if index < 0:
                return False
            offset = index + len(message)
        return True

    return predicate
