from __future__ import annotations

from datetime import date
from html import escape
from pathlib import Path
from typing import Iterable, Iterator, List

from .types import IndexEntry, MalformedPost, Post

DATE_FORMAT = "%B %d, %Y"

INDEX_CSS = """
body {
    margin: 0 auto;
    max-width: 760px;
    padding: 24px 20px 48px;
    font-family: 'Noto Serif SC', 'Source Han Serif', Georgia, serif;
    font-size: 16px;
    line-height: 1.6;
    color: #111;
}
h1 {
    font-size: 28px;
    margin-bottom: 24px;
}
.post-entry {
    margin-bottom: 28px;
    page-break-inside: avoid;
}
.post-entry h2 {
    font-size: 20px;
    margin: 0 0 4px;
}
.post-entry a {
    color: #0b5fff;
    text-decoration: none;
}
.post-entry time {
    color: #666;
    font-size: 14px;
}
.summary {
    margin: 6px 0 0;
}
"""


def format_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def _source_of(post: Post, position: int) -> str:
    return post.source or post.url or f"post #{position}"


def _require(post: Post, position: int) -> None:
    missing = []
    if not (post.title or "").strip():
        missing.append("title")
    if not isinstance(post.date, date):
        missing.append("date")
    if not (post.summary or "").strip():
        missing.append("summary")
    if missing:
        raise MalformedPost(_source_of(post, position), missing)


def iter_entries(posts: Iterable[Post]) -> Iterator[IndexEntry]:
    """
    Lazily turn posts into index entries, keeping the caller's order.
    Raises MalformedPost when the offending post is reached.
    """
    for position, post in enumerate(posts, start=1):
        _require(post, position)
        yield IndexEntry(
            title=post.title.strip(),
            url=post.url,
            formatted_date=format_date(post.date),
            summary=post.summary.strip(),
            date=post.date,
        )


def _entry_html(entry: IndexEntry) -> str:
    return "\n".join(
        [
            '    <article class="post-entry">',
            f'      <h2><a href="{escape(entry.url)}">{escape(entry.title)}</a></h2>',
            f'      <time datetime="{entry.date.isoformat()}">{escape(entry.formatted_date)}</time>',
            f'      <p class="summary">{escape(entry.summary)}</p>',
            "    </article>",
        ]
    )


def render_index(posts: Iterable[Post], title: str = "Blog", css: str = INDEX_CSS) -> str:
    # Collect everything first so a bad post aborts before any markup exists.
    entries: List[IndexEntry] = list(iter_entries(posts))

    if entries:
        body = "\n".join(_entry_html(entry) for entry in entries)
    else:
        body = '    <p class="empty">No posts yet.</p>'

    return "\n".join(
        [
            "<!doctype html>",
            '<html lang="en">',
            "  <head>",
            '    <meta charset="utf-8" />',
            '    <meta name="viewport" content="width=device-width, initial-scale=1" />',
            f"    <title>{escape(title)}</title>",
            f"    <style>{css}</style>",
            "  </head>",
            "  <body>",
            f"    <h1>{escape(title)}</h1>",
            "    <main>",
            body,
            "    </main>",
            "  </body>",
            "</html>",
            "",
        ]
    )


def write_index(posts: Iterable[Post], target: Path, title: str = "Blog") -> Path:
    content = render_index(posts, title=title)
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w", encoding="utf-8", newline="\n") as f:
        f.write(content)
    return target
