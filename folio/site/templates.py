"""HTML fragments mirroring the markup of the external markdown pipeline."""

from __future__ import annotations

from collections.abc import Iterable
from html import escape

from ..config import HIGHLIGHT_LINE_CLASS, HIGHLIGHT_WRAPPER_CLASS, LANGUAGE_CLASS_PREFIX


def html_doc(title: str, css: str, body: str) -> str:
    return (
        "<!doctype html>\n"
        '<html lang="en">\n'
        "<head>\n"
        '<meta charset="utf-8">\n'
        '<meta name="viewport" content="width=device-width, initial-scale=1">\n'
        f"<title>{escape(title)}</title>\n"
        f"<style>\n{css}</style>\n"
        "</head>\n"
        "<body>\n"
        f"{body}\n"
        "</body>\n"
        "</html>\n"
    )


def heading(level: int, text: str) -> str:
    if not 1 <= level <= 6:
        raise ValueError(f"heading level must be 1-6, got {level}")
    return f"<h{level}>{escape(text)}</h{level}>"


def para(html: str) -> str:
    """Paragraph around already-escaped inline HTML."""
    return f"<p>{html}</p>"


def link(href: str, text: str) -> str:
    return f'<a href="{escape(href, quote=True)}">{escape(text)}</a>'


def inline_code(text: str) -> str:
    return f"<code>{escape(text)}</code>"


def bullet_list(items: Iterable[str], ordered: bool = False) -> str:
    tag = "ol" if ordered else "ul"
    inner = "".join(f"<li>{escape(item)}</li>" for item in items)
    return f"<{tag}>{inner}</{tag}>"


def table(header: list[str], rows: list[list[str]]) -> str:
    lines = ["<table>", "<thead>", "<tr>"]
    lines.extend(f"<th>{escape(h)}</th>" for h in header)
    lines.extend(["</tr>", "</thead>", "<tbody>"])
    for row in rows:
        lines.append("<tr>" + "".join(f"<td>{escape(c)}</td>" for c in row) + "</tr>")
    lines.extend(["</tbody>", "</table>"])
    return "\n".join(lines)


def blockquote(paragraphs: Iterable[str]) -> str:
    inner = "".join(f"<p>{escape(p)}</p>" for p in paragraphs)
    return f"<blockquote>{inner}</blockquote>"


def code_block(code: str, language: str, highlight: Iterable[int] = ()) -> str:
    """Render a fenced code block the way the Prism plugin does.

    Lines whose 1-based number is in ``highlight`` are wrapped in the
    highlighted-line marker span; the trailing newline moves inside the span.
    """
    marked = set(highlight)
    lang_class = f"{LANGUAGE_CLASS_PREFIX}{language}"
    out = []
    for n, line in enumerate(code.split("\n"), start=1):
        if n in marked:
            out.append(f'<span class="{HIGHLIGHT_LINE_CLASS}">{escape(line)}\n</span>')
        else:
            out.append(escape(line) + "\n")
    text = "".join(out).rstrip("\n")
    return (
        f'<div class="{HIGHLIGHT_WRAPPER_CLASS}" data-language="{escape(language, quote=True)}">'
        f'<pre class="{lang_class}"><code class="{lang_class}">{text}</code></pre>'
        "</div>"
    )
