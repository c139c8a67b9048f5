"""Ordered fallback chains."""

from collections.abc import Callable, Iterable
from typing import TypeVar

T = TypeVar("T")


def first_match(candidates: Iterable[Callable[[], T | None]]) -> T | None:
    """Evaluate candidates in order and return the first truthy result.

    Candidates are zero-argument callables so later (possibly more expensive)
    sources are only consulted when earlier ones come up empty.

    Example:
        first_match([lambda: msg.sender_name, lambda: msg.sent_representing_name])
    """
    for candidate in candidates:
        value = candidate()
        if value:
            return value
    return None
