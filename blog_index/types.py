from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional


@dataclass(frozen=True)
class Post:
    """A single authored article as it appears on the blog index."""

    title: str
    date: date
    summary: str
    url: str
    body: str = ""
    source: Optional[str] = None


@dataclass(frozen=True)
class IndexEntry:
    title: str
    url: str
    formatted_date: str
    summary: str
    date: date


class MalformedPost(ValueError):
    """A post document is missing fields the index needs."""

    def __init__(self, source: str, missing: Iterable[str] = (), reason: str = "") -> None:
        self.source = source
        self.missing = tuple(missing)
        if not reason:
            reason = f"missing {', '.join(self.missing)}"
        super().__init__(f"Malformed post {source}: {reason}")
