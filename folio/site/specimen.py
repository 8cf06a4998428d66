"""Style specimen: one page showing every element the rule set styles."""

from __future__ import annotations

from pathlib import Path

from ..config import SPECIMEN_NAME
from ..theme.blog import BLOG_RULES
from ..theme.rules import RuleSet
from ..theme.stylesheet import compile_css
from ..theme.tokens import DEFAULT_TOKENS, ThemeTokens
from .templates import (
    blockquote,
    bullet_list,
    code_block,
    heading,
    html_doc,
    inline_code,
    link,
    para,
    table,
)

SAMPLE_CODE = """\
const messages = {
  en: { greeting: 'Hello, {name}!' },

  fr: { greeting: 'Bonjour, {name} !' },
};

function t(locale, key, params) {
  return format(messages[locale][key], params);
}"""


def specimen_body() -> str:
    parts = [
        heading(1, "Heading one"),
        para(
            "Body copy with "
            + inline_code("inline code")
            + " and "
            + link("https://example.com/", "a link")
            + "."
        ),
        heading(2, "Heading two"),
        bullet_list(["First item", "Second item", "Third item"]),
        bullet_list(["One", "Two"], ordered=True),
        heading(3, "Heading three"),
        table(
            ["Locale", "Plural forms", "Direction"],
            [
                ["en", "2", "ltr"],
                ["ar", "6", "rtl"],
                ["ja", "1", "ltr"],
                ["pl", "3", "ltr"],
            ],
        ),
        heading(4, "Heading four"),
        blockquote(["Blockquotes bleed into the gutter, like code blocks."]),
        heading(5, "Heading five"),
        # Line 3 is empty and marked: it must keep its height.
        code_block(SAMPLE_CODE, "js", highlight=(2, 3)),
        "<hr>",
    ]
    return "\n".join(parts)


def render_specimen(css: str) -> str:
    """Return a standalone HTML page with the CSS inlined."""
    return html_doc(title="Folio style specimen", css=css, body=specimen_body())


def write_specimen(
    out_dir: Path,
    rule_set: RuleSet = BLOG_RULES,
    tokens: ThemeTokens = DEFAULT_TOKENS,
) -> Path:
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / SPECIMEN_NAME
    path.write_text(render_specimen(compile_css(rule_set, tokens)), encoding="utf-8")
    return path
