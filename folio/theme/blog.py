"""The blog's cascading rule set.

Rules target the markup produced by the external markdown renderer and the
Prism-based highlighter. Order matters: later rules win ties.
"""

from __future__ import annotations

from ..config import HIGHLIGHT_LINE_CLASS, HIGHLIGHT_WRAPPER_CLASS, LANGUAGE_CLASS_PREFIX
from .rules import Media, RuleSet, decl
from .values import ref

PHONE = Media.below_token("breakpoint_phone")


def build_rules(
    wrapper_class: str = HIGHLIGHT_WRAPPER_CLASS,
    line_class: str = HIGHLIGHT_LINE_CLASS,
    language_prefix: str = LANGUAGE_CLASS_PREFIX,
) -> RuleSet:
    """Build the rule set for the given renderer class names."""
    rules = RuleSet()
    wrapper = f".{wrapper_class}"
    line = f".{line_class}"
    lang = f'[class*="{language_prefix}"]'

    # Page
    rules.add(
        "html",
        decl("font-size", ref("font_size_base")),
    )
    rules.add(
        "body",
        decl("font-family", ref("font_serif")),
        decl("font-weight", ref("font_weight_body")),
        decl("line-height", ref("line_height")),
        decl("color", ref("color_text")),
        decl("background-color", ref("color_background")),
        decl("max-width", ref("content_max_width")),
        decl("margin-left", "auto"),
        decl("margin-right", "auto"),
        decl("padding-left", ref("padding") * 2),
        decl("padding-right", ref("padding") * 2),
        decl("word-wrap", "break-word"),
    )

    # Text
    rules.add(
        "p",
        decl("margin-top", "0"),
        decl("margin-bottom", ref("spacing_block")),
    )
    rules.add(
        "h1, h2, h3, h4, h5",
        decl("font-family", ref("font_sans")),
        decl("font-weight", ref("font_weight_heading")),
        decl("line-height", ref("line_height_heading")),
        decl("color", ref("color_heading")),
        decl("margin-top", ref("spacing_block") * 2),
        decl("margin-bottom", ref("spacing_block")),
        decl("text-rendering", "optimizeLegibility"),
    )
    rules.add("h1", decl("font-size", ref("font_size_h1")), decl("margin-top", "0"))
    rules.add("h2", decl("font-size", ref("font_size_h2")))
    rules.add("h3", decl("font-size", ref("font_size_h3")))
    rules.add("h4", decl("font-size", ref("font_size_h4")))
    rules.add(
        "h5",
        decl("font-size", ref("font_size_h5")),
        decl("text-transform", "uppercase"),
    )
    rules.add(
        "a",
        decl("color", ref("color_link")),
        decl("text-decoration", "none"),
        decl("box-shadow", "0", ref("border_width"), "0", "0", "currentColor"),
    )
    rules.add(
        "hr",
        decl("border", "none"),
        decl("height", ref("border_width")),
        decl("background-color", ref("color_border")),
        decl("margin-top", "0"),
        decl("margin-bottom", ref("spacing_block")),
    )
    rules.add("img", decl("max-width", ref("full_width")))

    # Lists
    rules.add(
        "ul, ol",
        decl("margin-top", "0"),
        decl("margin-bottom", ref("spacing_block")),
        decl("margin-left", ref("list_indent")),
        decl("padding-left", "0"),
    )
    rules.add("li", decl("margin-bottom", ref("spacing_small")))
    rules.add(
        "li > p, li > ul, li > ol",
        decl("margin-top", ref("spacing_small")),
        decl("margin-bottom", ref("spacing_small")),
    )

    # Tables
    rules.add(
        "table",
        decl("width", ref("full_width")),
        decl("border-collapse", "collapse"),
        decl("margin-bottom", ref("spacing_block")),
        decl("font-size", ref("font_size_small")),
    )
    rules.add(
        "th, td",
        decl("text-align", "left"),
        decl("padding", ref("spacing_small"), ref("padding") * 0.5),
        decl("border-bottom", ref("border_width"), "solid", ref("color_border")),
    )
    rules.add("tr:nth-child(odd)", decl("background-color", ref("color_table_stripe")))

    # Blockquotes bleed into the gutter like code blocks.
    rules.add(
        "blockquote",
        decl("margin-top", "0"),
        decl("margin-bottom", ref("spacing_block")),
        decl("margin-left", -ref("padding")),
        decl("margin-right", -ref("padding")),
        decl("padding-left", ref("padding") * 0.75),
        decl("padding-right", "0"),
        decl("border-left", ref("quote_bar_width"), "solid", ref("color_quote_border")),
        decl("border-radius", "0"),
        decl("color", ref("color_quote_text")),
        decl("font-style", "italic"),
    )
    rules.add("blockquote > p:last-child", decl("margin-bottom", "0"))

    # Inline code
    rules.add(
        "code",
        decl("font-family", ref("font_mono")),
        decl("font-size", ref("font_size_code")),
        decl("color", ref("color_inline_code_text")),
        decl("background-color", ref("color_inline_code_background")),
        decl("padding", ref("spacing_inline_code") * 0.5, ref("spacing_inline_code")),
        decl("border-radius", ref("border_radius")),
        decl("white-space", "nowrap"),
    )

    # Fenced code blocks
    rules.add(
        wrapper,
        decl("background-color", ref("color_code_background")),
        decl("margin-top", "0"),
        decl("margin-bottom", ref("spacing_block")),
        decl("margin-left", -ref("padding")),
        decl("margin-right", -ref("padding")),
        decl("padding-left", "0"),
        decl("padding-right", "0"),
        decl("border-radius", "0"),
        decl("overflow", "auto"),
        decl("-webkit-overflow-scrolling", "touch"),
    )
    rules.add(
        f"{wrapper} pre{lang}",
        decl("background-color", "transparent"),
        decl("margin", "0"),
        decl("padding", ref("padding")),
        decl("overflow", "initial"),
        decl("float", "left"),
        decl("min-width", ref("full_width")),
    )
    rules.add(
        f"{wrapper} pre{lang}, {wrapper} code{lang}",
        decl("color", ref("color_code_text")),
        decl("font-family", ref("font_mono")),
        decl("font-size", ref("font_size_code")),
        decl("line-height", ref("line_height")),
        decl("white-space", "pre"),
        decl("word-spacing", "normal"),
        decl("word-break", "normal"),
        decl("tab-size", ref("tab_size")),
        decl("hyphens", "none"),
    )
    rules.add(
        "pre code",
        decl("background-color", "transparent"),
        decl("padding", "0"),
        decl("border-radius", "0"),
        decl("white-space", "pre"),
    )
    rules.add(
        f"{wrapper} {line}",
        decl("display", "block"),
        decl("background-color", ref("color_highlight_background")),
        decl("border-left", ref("accent_bar_width"), "solid", ref("color_highlight_bar")),
        decl("margin-left", -ref("padding")),
        decl("margin-right", -ref("padding")),
        decl("padding-left", ref("padding") * 0.8),
        decl("padding-right", ref("padding")),
        # An empty marked line must not collapse.
        decl("min-height", ref("font_size_base") * ref("line_height")),
    )

    # Phones: blocks run to the screen edge, keeping their own padding and corners.
    with rules.media(PHONE):
        rules.add(
            "body",
            decl("padding-left", ref("font_size_h1")),
            decl("padding-right", ref("font_size_h1")),
        )
        rules.add(
            f"{wrapper}, blockquote",
            decl("margin-left", -ref("font_size_h1")),
            decl("margin-right", -ref("font_size_h1")),
            decl("padding-left", ref("padding")),
            decl("padding-right", ref("padding")),
            decl("border-radius", ref("border_radius")),
        )
    return rules


BLOG_RULES = build_rules()
