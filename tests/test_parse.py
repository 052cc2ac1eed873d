from __future__ import annotations

from datetime import date

import pytest

from blog_index.parse import parse_index
from blog_index.render import render_index
from blog_index.types import Post


def test_round_trip_keeps_titles_and_dates() -> None:
    posts = [
        Post(title="Tom & Jerry", date=date(2026, 2, 7), summary="Cats <3 mice", url="/2026/02/07/tom/"),
        Post(title="苏剑林选集", date=date(2026, 2, 4), summary="中文摘要", url="/2026/02/04/su/"),
        Post(title="Plain", date=date(2025, 12, 31), summary="End of year.", url="/2025/12/31/plain/"),
    ]

    parsed = parse_index(render_index(posts))

    assert [(p.title, p.date) for p in parsed] == [(p.title, p.date) for p in posts]
    assert [p.url for p in parsed] == [p.url for p in posts]
    assert parsed[0].summary == "Cats <3 mice"


def test_visible_date_used_without_datetime_attribute() -> None:
    html = """
    <article class="post-entry">
      <h2><a href="/x/">X</a></h2>
      <time>February 07, 2026</time>
      <p class="summary">s</p>
    </article>
    """

    (post,) = parse_index(html)

    assert post.date == date(2026, 2, 7)


def test_entry_without_link_is_rejected() -> None:
    html = '<article class="post-entry"><h2>No link</h2><time datetime="2026-02-07"></time></article>'

    with pytest.raises(ValueError):
        parse_index(html)


def test_entry_without_date_is_rejected() -> None:
    html = '<article class="post-entry"><h2><a href="/x/">X</a></h2></article>'

    with pytest.raises(ValueError, match="Missing date"):
        parse_index(html)


def test_empty_index_parses_to_nothing() -> None:
    assert parse_index(render_index([])) == []


def test_bad_datetime_attribute_names_the_post() -> None:
    html = '<article class="post-entry"><h2><a href="/x/">X</a></h2><time datetime="2026-13-01"></time></article>'

    with pytest.raises(ValueError, match="Unreadable date for post: X"):
        parse_index(html)
