from __future__ import annotations

from argparse import ArgumentParser
from pathlib import Path
from typing import Optional, Sequence

from playwright.sync_api import Error as PlaywrightError

from .export import export_pdf
from .load import load_posts
from .render import write_index
from .types import MalformedPost


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        description="Render the blog index page from a directory of Markdown posts."
    )
    parser.add_argument(
        "--content-dir",
        type=str,
        default="posts",
        help="Directory holding the Markdown posts (default: posts)",
    )
    parser.add_argument(
        "--out",
        type=str,
        default="output/index.html",
        help="Where to write the index page (default: output/index.html)",
    )
    parser.add_argument(
        "--base-url",
        type=str,
        default="/",
        help="Prefix for post links (default: /)",
    )
    parser.add_argument(
        "--title", type=str, default="Blog", help="Index page title (default: Blog)"
    )
    parser.add_argument(
        "--limit", type=int, default=None, help="Only list the newest N posts"
    )
    parser.add_argument(
        "--order",
        choices=("asc", "desc"),
        default="desc",
        help="Sort posts by date: asc or desc (default: desc)",
    )
    parser.add_argument(
        "--pdf",
        type=str,
        default=None,
        help="Also print the index to this PDF file",
    )
    parser.add_argument(
        "--no-page-numbers",
        dest="page_numbers",
        action="store_false",
        help="Disable printing page numbers on each PDF page",
    )
    parser.set_defaults(page_numbers=True)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.limit is not None and args.limit < 0:
        parser.error("--limit must be zero or positive")

    try:
        posts = load_posts(Path(args.content_dir), base_url=args.base_url)
    except (MalformedPost, FileNotFoundError) as exc:
        raise SystemExit(f"[error] {exc}") from exc
    if args.limit:
        posts = posts[: args.limit]
    print(f"[load] 文章数: {len(posts)}")

    if args.order == "asc":
        posts = list(reversed(posts))

    try:
        index_path = write_index(posts, Path(args.out), title=args.title)
    except MalformedPost as exc:
        raise SystemExit(f"[error] {exc}") from exc
    print(f"[render] 索引页已生成: {index_path}")

    if args.pdf:
        try:
            pdf_path = export_pdf(
                index_path.read_text(encoding="utf-8"),
                Path(args.pdf),
                add_page_numbers=args.page_numbers,
            )
        except PlaywrightError as exc:
            raise SystemExit(f"[error] PDF 导出失败: {exc}") from exc
        print(f"[pdf] {pdf_path}")

    print("[done]")


if __name__ == "__main__":
    main()
