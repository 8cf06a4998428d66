"""Tests for CSS compilation and the rule set audit."""

from __future__ import annotations

import re
import tempfile
import unittest
from pathlib import Path

from folio.theme.blog import BLOG_RULES
from folio.theme.rules import Media, RuleSet, decl
from folio.theme.stylesheet import audit, compile_css, unused_tokens, write_css
from folio.theme.tokens import DEFAULT_TOKENS
from folio.theme.values import ThemeError, ref


class TestCompileCss(unittest.TestCase):
    def test_output_is_deterministic(self) -> None:
        self.assertEqual(compile_css(BLOG_RULES), compile_css(BLOG_RULES))

    def test_contains_resolved_token_values(self) -> None:
        css = compile_css(BLOG_RULES)
        self.assertIn(f"margin-left: -{DEFAULT_TOKENS.css('padding')};", css)
        self.assertIn(f"background-color: {DEFAULT_TOKENS.color_table_stripe};", css)
        self.assertIn("tr:nth-child(odd) {", css)
        self.assertIn('.gatsby-highlight code[class*="language-"]', css)
        self.assertNotIn("$", css)

    def test_media_block_uses_breakpoint_token(self) -> None:
        css = compile_css(BLOG_RULES)
        self.assertEqual(css.count("@media (width < 672px) {"), 1)

    def test_media_rules_keep_source_order(self) -> None:
        rules = RuleSet()
        rules.add("p", decl("color", ref("color_text")))
        with rules.media(Media.below_token("breakpoint_phone")):
            rules.add("p", decl("color", ref("color_link")))
            rules.add("a", decl("color", ref("color_text")))
        rules.add("h1", decl("color", ref("color_heading")))
        css = compile_css(rules)
        self.assertLess(css.index("p {"), css.index("@media"))
        self.assertLess(css.index("@media"), css.index("h1 {"))
        self.assertIn("  p {\n    color: #d23669;\n  }", css)

    def test_every_declaration_is_emitted_exactly(self) -> None:
        css = compile_css(BLOG_RULES)
        self.assertIn(f"border-left: {DEFAULT_TOKENS.css('quote_bar_width')} solid", css)
        self.assertIn("0.32813rem", css)
        for rule in BLOG_RULES:
            for d in rule.declarations:
                with self.subTest(rule=rule.selector_text(), prop=d.prop):
                    self.assertIn(f"{d.prop}: {d.resolve(DEFAULT_TOKENS)};", css)

    def test_braces_balance(self) -> None:
        css = compile_css(BLOG_RULES)
        self.assertEqual(css.count("{"), css.count("}"))

    def test_no_literal_values_outside_tokens(self) -> None:
        # Every length/color in the output must come from a token (or a scaled token).
        css = compile_css(BLOG_RULES)
        colors = set(re.findall(r"#[0-9a-f]{6}\b", css))
        token_colors = {v for v in DEFAULT_TOKENS.table().values() if isinstance(v, str)}
        self.assertTrue(colors <= token_colors, colors - token_colors)

    def test_write_css(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            out = Path(td) / "public" / "style.css"
            path = write_css(BLOG_RULES, out)
            self.assertTrue(path.exists())
            self.assertEqual(path.read_text(encoding="utf-8"), compile_css(BLOG_RULES))


class TestRuleConstruction(unittest.TestCase):
    def test_magic_literal_rejected(self) -> None:
        with self.assertRaises(ThemeError):
            decl("margin-left", "-21px")
        with self.assertRaises(ThemeError):
            decl("color", "#ff0000")

    def test_empty_rule_rejected(self) -> None:
        with self.assertRaises(ThemeError):
            RuleSet().add("p")

    def test_nested_media_rejected(self) -> None:
        rules = RuleSet()
        phone = Media.below_token("breakpoint_phone")
        with rules.media(phone):
            with self.assertRaises(ThemeError):
                with rules.media(phone):
                    pass


class TestAudit(unittest.TestCase):
    def test_blog_rules_are_clean(self) -> None:
        self.assertEqual(audit(BLOG_RULES), [])

    def test_every_token_is_used(self) -> None:
        self.assertEqual(unused_tokens(BLOG_RULES), [])

    def test_reports_foreign_markup(self) -> None:
        rules = RuleSet()
        rules.add("marquee", decl("color", ref("color_text")))
        problems = audit(rules)
        self.assertEqual(len(problems), 1)
        self.assertIn("marquee", problems[0])

    def test_reports_bad_arithmetic(self) -> None:
        rules = RuleSet()
        rules.add("p", decl("color", ref("color_text") * 2))
        problems = audit(rules)
        self.assertEqual(len(problems), 1)
        self.assertIn("color", problems[0])

    def test_reports_non_px_breakpoint(self) -> None:
        rules = RuleSet()
        with rules.media(Media.below_token("padding")):
            rules.add("p", decl("margin-left", "0"))
        self.assertTrue(any("media" in p for p in audit(rules)))


if __name__ == "__main__":
    unittest.main()
