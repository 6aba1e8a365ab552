"""Ordered fallback chains: the first strategy yielding a present value wins."""

from __future__ import annotations

import logging
from typing import Callable, Sequence, TypeVar

logger = logging.getLogger(__name__)

S = TypeVar("S")
R = TypeVar("R")


def is_present(value: object) -> bool:
    """Empty strings and empty sequences count as absent."""

    if value is None:
        return False
    if isinstance(value, (str, list, tuple)):
        return len(value) > 0
    return True


def none_if_empty(value: R | None) -> R | None:
    return value if is_present(value) else None


def first_present(field: str, source: S, strategies: Sequence[Callable[[S], R | None]]) -> R | None:
    for strategy in strategies:
        value = strategy(source)
        if is_present(value):
            logger.debug("%s resolved by %s", field, getattr(strategy, "__name__", repr(strategy)))
            return value
    logger.debug("%s not found", field)
    return None
