"""CLI entry point for Folio.

This CLI intentionally avoids third-party CLI frameworks so the theme can be
built from any environment that has the runtime dependencies.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

from . import __version__
from .config import CONTENT_DIR, OUTPUT_DIR, STYLESHEET_NAME


def app(argv: list[str] | None = None) -> None:
    """Console script entrypoint."""
    raise SystemExit(main(argv))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="folio",
        description="Theme and content toolkit for the blog: compile CSS, check articles.",
    )
    parser.add_argument(
        "--version",
        "-v",
        action="version",
        version=f"Folio {__version__}",
    )

    sub = parser.add_subparsers(dest="cmd", required=True)

    p_css = sub.add_parser("css", help="Compile the stylesheet")
    p_css.add_argument("--out", "-o", type=Path, default=None, help=f"Output file (stdout if omitted, e.g. public/{STYLESHEET_NAME})")
    p_css.add_argument("--tokens", "-t", type=Path, default=None, help="JSON file of token overrides")

    p_check = sub.add_parser("check", help="Audit the rule set and check every article")
    p_check.add_argument("--content", "-c", type=Path, default=CONTENT_DIR, help="Content directory")
    p_check.add_argument("--tokens", "-t", type=Path, default=None, help="JSON file of token overrides")

    p_manifest = sub.add_parser("manifest", help="Write content.json for the site generator")
    p_manifest.add_argument("--content", "-c", type=Path, default=CONTENT_DIR, help="Content directory")
    p_manifest.add_argument("--out", "-o", type=Path, default=OUTPUT_DIR, help="Output directory")
    p_manifest.add_argument("--tokens", "-t", type=Path, default=None, help="JSON file of token overrides")

    p_specimen = sub.add_parser("specimen", help="Write a style specimen page")
    p_specimen.add_argument("--out", "-o", type=Path, default=OUTPUT_DIR, help="Output directory")
    p_specimen.add_argument("--tokens", "-t", type=Path, default=None, help="JSON file of token overrides")

    p_resolve = sub.add_parser("resolve", help="Print the computed style of an element")
    p_resolve.add_argument("path", help='Element path, e.g. "table > tbody > tr:3 > td"')
    p_resolve.add_argument("--width", "-w", type=float, default=1024, help="Viewport width in px")
    p_resolve.add_argument("--tokens", "-t", type=Path, default=None, help="JSON file of token overrides")

    p_tokens = sub.add_parser("tokens", help="Print the token table")
    p_tokens.add_argument("--tokens", "-t", type=Path, default=None, help="JSON file of token overrides")

    args = parser.parse_args(argv)

    if args.cmd == "css":
        return _cmd_css(args)
    if args.cmd == "check":
        return _cmd_check(args)
    if args.cmd == "manifest":
        return _cmd_manifest(args)
    if args.cmd == "specimen":
        return _cmd_specimen(args)
    if args.cmd == "resolve":
        return _cmd_resolve(args)
    if args.cmd == "tokens":
        return _cmd_tokens(args)

    parser.print_help()
    return 2


def _load_tokens(args: Any):
    from .theme.tokens import load_tokens

    return load_tokens(getattr(args, "tokens", None))


def _cmd_css(args: Any) -> int:
    from .theme.blog import BLOG_RULES
    from .theme.stylesheet import compile_css, write_css

    try:
        tokens = _load_tokens(args)
        if args.out is None:
            sys.stdout.write(compile_css(BLOG_RULES, tokens))
            return 0
        path = write_css(BLOG_RULES, args.out, tokens)
    except (ValueError, KeyError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"✓ Stylesheet written: {path}")
    print(f"  Rules: {len(BLOG_RULES)}")
    return 0


def _cmd_check(args: Any) -> int:
    from .content.documents import check_documents
    from .theme.blog import BLOG_RULES
    from .theme.stylesheet import audit, unused_tokens

    try:
        tokens = _load_tokens(args)
    except (ValueError, KeyError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    problems = audit(BLOG_RULES, tokens)
    documents, doc_problems = check_documents(args.content)
    problems.extend(doc_problems)
    unused = unused_tokens(BLOG_RULES, tokens)

    print(f"Rules: {len(BLOG_RULES)}")
    print(f"Documents: {len(documents)}")
    if unused:
        print(f"Unused tokens: {', '.join(unused)}")

    if problems:
        print(f"\nProblems ({len(problems)}):", file=sys.stderr)
        for p in problems[:10]:
            print(f"  - {p}", file=sys.stderr)
        if len(problems) > 10:
            print(f"  ... and {len(problems) - 10} more", file=sys.stderr)
        return 1

    print("✓ Theme and content OK")
    return 0


def _cmd_manifest(args: Any) -> int:
    from .content.documents import load_documents
    from .content.manifest import create_manifest, write_manifest
    from .theme.blog import BLOG_RULES
    from .theme.stylesheet import compile_css

    try:
        tokens = _load_tokens(args)
        documents = load_documents(args.content)
        manifest = create_manifest(documents, stylesheet=compile_css(BLOG_RULES, tokens))
        path = write_manifest(manifest, args.out)
    except (ValueError, KeyError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"✓ Manifest written: {path}")
    print(f"  Documents: {len(manifest.documents)}")
    print(f"  Tags: {len(manifest.tags)}")
    return 0


def _cmd_specimen(args: Any) -> int:
    from .site.specimen import write_specimen
    from .theme.blog import BLOG_RULES

    try:
        tokens = _load_tokens(args)
        path = write_specimen(args.out, BLOG_RULES, tokens)
    except (ValueError, KeyError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"✓ Specimen written: {path}")
    return 0


def _cmd_resolve(args: Any) -> int:
    from .theme.blog import BLOG_RULES
    from .theme.selectors import Element

    try:
        tokens = _load_tokens(args)
        element = Element.path(args.path)
        style = BLOG_RULES.compute(element, args.width, tokens)
    except (ValueError, KeyError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not style:
        print("(no rules match; user agent defaults apply)")
        return 0
    width = max(len(prop) for prop in style)
    for prop, value in style.items():
        print(f"  {prop:{width}}  {value}")
    return 0


def _cmd_tokens(args: Any) -> int:
    from .theme.values import format_value

    try:
        tokens = _load_tokens(args)
    except (ValueError, KeyError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    table = tokens.table()
    width = max(len(name) for name in table)
    for name, value in table.items():
        print(f"  {name:{width}}  {format_value(value)}")
    return 0


if __name__ == "__main__":
    app()
