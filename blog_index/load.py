from __future__ import annotations

from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Tuple
from urllib.parse import urljoin
import re

import yaml

from .types import MalformedPost, Post

POST_SUFFIXES = (".md", ".markdown")
FRONT_MATTER_PATTERN = re.compile(r"\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)", re.DOTALL)
DATE_PREFIX_PATTERN = re.compile(r"^(\d{4}-\d{2}-\d{2})-")
SLUG_PATTERN = re.compile(r"[^\w]+")


def slugify(text: str) -> str:
    return SLUG_PATTERN.sub("-", text.lower()).strip("-_")


def _split_front_matter(text: str, source: str) -> Tuple[Dict[str, Any], str]:
    match = FRONT_MATTER_PATTERN.match(text)
    if not match:
        raise MalformedPost(source, reason="no front matter block")

    try:
        meta = yaml.safe_load(match.group(1)) or {}
    except (yaml.YAMLError, ValueError) as exc:
        # Timestamps like 2026-02-30 fail inside the constructor with a plain ValueError.
        raise MalformedPost(source, reason=f"unreadable front matter ({exc})") from exc

    if not isinstance(meta, dict):
        raise MalformedPost(source, reason="front matter is not a mapping")

    return meta, text[match.end():]


def _coerce_date(value: Any, source: str) -> date:
    # YAML already turns bare 2026-02-07 into a date; quoted values arrive as str.
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(text).date()
        except ValueError:
            pass
    raise MalformedPost(source, reason=f"unrecognised date {value!r}")


def _text_field(meta: Dict[str, Any], *keys: str) -> str:
    for key in keys:
        value = meta.get(key)
        if value is not None:
            return str(value).strip()
    return ""


def _parse_post(path: Path, meta: Dict[str, Any], body: str, base_url: str, source: str) -> Post:
    title = _text_field(meta, "title")
    summary = _text_field(meta, "summary", "description")

    raw_date = meta.get("date")
    prefix = DATE_PREFIX_PATTERN.match(path.stem)
    if raw_date is None and prefix:
        raw_date = prefix.group(1)

    missing = [
        name
        for name, value in (("title", title), ("date", raw_date), ("summary", summary))
        if not value
    ]
    if missing:
        raise MalformedPost(source, missing)

    publish_date = _coerce_date(raw_date, source)

    stem = DATE_PREFIX_PATTERN.sub("", path.stem)
    slug = slugify(_text_field(meta, "slug") or stem) or slugify(title)
    if not slug:
        raise MalformedPost(source, reason="cannot derive a slug")

    url = urljoin(base_url, f"{publish_date:%Y/%m/%d}/{slug}/")
    return Post(
        title=title,
        date=publish_date,
        summary=summary,
        url=url,
        body=body.strip(),
        source=source,
    )


def load_posts(content_dir: Path, base_url: str = "/") -> List[Post]:
    """Read every Markdown post under content_dir, newest first."""

    if not content_dir.is_dir():
        raise FileNotFoundError(f"Content directory not found: {content_dir}")
    if not base_url.endswith("/"):
        base_url += "/"

    posts: List[Post] = []
    seen_urls: dict[str, str] = {}

    paths = sorted(
        p for p in content_dir.rglob("*") if p.is_file() and p.suffix.lower() in POST_SUFFIXES
    )
    for path in paths:
        source = path.relative_to(content_dir).as_posix()
        try:
            text = path.read_text(encoding="utf-8-sig")
        except UnicodeDecodeError as exc:
            raise MalformedPost(source, reason="not valid UTF-8") from exc
        meta, body = _split_front_matter(text, source)

        if meta.get("draft") is True:
            print(f"[load] 跳过草稿: {source}")
            continue

        post = _parse_post(path, meta, body, base_url, source)
        if post.url in seen_urls:
            raise MalformedPost(
                source, reason=f"URL {post.url} already used by {seen_urls[post.url]}"
            )
        seen_urls[post.url] = source
        posts.append(post)

    def _sort_key(p: Post) -> tuple[date, str]:
        # URL as tie-breaker keeps same-day posts in a stable order between builds.
        return (p.date, p.url)

    posts.sort(key=_sort_key, reverse=True)
    return posts


def iter_posts(content_dir: Path, base_url: str = "/") -> Iterable[Post]:
    """Yield posts in display order (newest first)."""

    for post in load_posts(content_dir, base_url):
        yield post
