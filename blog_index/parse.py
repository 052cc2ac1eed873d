from __future__ import annotations

from datetime import date, datetime
from typing import List

from bs4 import BeautifulSoup, Tag

from .render import DATE_FORMAT
from .types import Post


def _parse_date(time_el: Tag, title: str) -> date:
    stamp = time_el.get("datetime")
    if stamp:
        try:
            return date.fromisoformat(str(stamp))
        except ValueError as exc:
            raise ValueError(f"Unreadable date for post: {title}") from exc

    text = time_el.get_text(strip=True)
    try:
        return datetime.strptime(text, DATE_FORMAT).date()
    except ValueError as exc:
        raise ValueError(f"Unreadable date for post: {title}") from exc


def _parse_entry(entry_el: Tag) -> Post:
    title_el = entry_el.select_one("h2 a")
    if not title_el or not title_el.get("href"):
        raise ValueError("Index entry is missing title link")

    title = title_el.get_text(strip=True)

    time_el = entry_el.select_one("time")
    if not time_el:
        raise ValueError(f"Missing date for post: {title}")

    summary_el = entry_el.select_one("p.summary")
    summary = summary_el.get_text(strip=True) if summary_el else ""

    return Post(
        title=title,
        date=_parse_date(time_el, title),
        summary=summary,
        url=str(title_el["href"]),
    )


def parse_index(html: str) -> List[Post]:
    """Read the listed posts back out of a rendered index page, in page order."""

    soup = BeautifulSoup(html, "lxml")
    return [_parse_entry(el) for el in soup.select("article.post-entry")]
