"""Bounded polling over a live page and the driver seam used by the harness."""

from __future__ import annotations

import logging
from pathlib import Path
import time
from typing import Callable, Protocol, TypeVar

from bs4 import BeautifulSoup
from bs4.element import Tag

from patextract.dom.tree import inner_text, load_document, read_snapshot

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PageDriver(Protocol):
    """What the extraction workflows need from whoever owns the browser."""

    def snapshot(self) -> BeautifulSoup:
        """Return the current document tree."""

    def click(self, element: Tag) -> None:
        """Activate the live counterpart of *element*."""


class StaticPage:
    """Driver over a fixed HTML snapshot; clicks are recorded by label only."""

    def __init__(self, markup: str | bytes) -> None:
        self._markup = markup
        self.clicked: list[str] = []

    @classmethod
    def from_file(cls, path: str | Path) -> "StaticPage":
        return cls(read_snapshot(path))

    def snapshot(self) -> BeautifulSoup:
        return load_document(self._markup)

    def click(self, element: Tag) -> None:
        self.clicked.append(inner_text(element))


def poll_until(
    check: Callable[[], T],
    *,
    attempts: int,
    delay_seconds: float,
    sleep: Callable[[float], None] = time.sleep,
) -> T | None:
    """Call *check* until it returns something truthy or attempts run out.

    Exhaustion is not an error: the last observed value is returned, which
    may be empty.
    """

    result: T | None = None
    for attempt in range(1, attempts + 1):
        result = check()
        if result:
            return result
        if attempt < attempts:
            sleep(delay_seconds)

    logger.debug("Polling exhausted after %d attempts", attempts)
    return result


def wait_for_element(
    page: PageDriver,
    selector: str,
    *,
    attempts: int,
    delay_seconds: float,
    sleep: Callable[[float], None] = time.sleep,
) -> Tag | None:
    return poll_until(
        lambda: page.snapshot().select_one(selector),
        attempts=attempts,
        delay_seconds=delay_seconds,
        sleep=sleep,
    )


def wait_for_elements(
    page: PageDriver,
    selector: str,
    *,
    attempts: int,
    delay_seconds: float,
    sleep: Callable[[float], None] = time.sleep,
) -> list[Tag]:
    found = poll_until(
        lambda: page.snapshot().select(selector),
        attempts=attempts,
        delay_seconds=delay_seconds,
        sleep=sleep,
    )
    return list(found or [])
