"""Theme tokens, the cascading rule set and the CSS compiler."""

from .blog import BLOG_RULES, build_rules
from .cascade import compute_style
from .rules import Declaration, Media, Rule, RuleSet, decl
from .selectors import Element, SelectorError, parse_selector, parse_selector_list
from .stylesheet import audit, compile_css, unused_tokens, write_css
from .tokens import DEFAULT_TOKENS, ThemeTokens, load_tokens
from .values import Keyword, Length, ThemeError, TokenRef, UnknownTokenError, ref

__all__ = [
    "BLOG_RULES",
    "build_rules",
    "compute_style",
    "Declaration",
    "Media",
    "Rule",
    "RuleSet",
    "decl",
    "Element",
    "SelectorError",
    "parse_selector",
    "parse_selector_list",
    "audit",
    "compile_css",
    "unused_tokens",
    "write_css",
    "DEFAULT_TOKENS",
    "ThemeTokens",
    "load_tokens",
    "Keyword",
    "Length",
    "ThemeError",
    "TokenRef",
    "UnknownTokenError",
    "ref",
]
