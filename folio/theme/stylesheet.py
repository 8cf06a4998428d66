"""Compile the rule set to CSS and audit it against the token table."""

from __future__ import annotations

from pathlib import Path

from .rules import Rule, RuleSet
from .selectors import RENDERER_TAGS
from .tokens import DEFAULT_TOKENS, ThemeTokens
from .values import ThemeError, UnknownTokenError

HEADER = "/* Generated by folio. Edit folio/theme/blog.py, not this file. */\n"


def _format_rule(rule: Rule, tokens: ThemeTokens, indent: str = "") -> list[str]:
    lines = []
    selectors = [str(s) for s in rule.selectors]
    for i, sel in enumerate(selectors):
        sep = "," if i < len(selectors) - 1 else " {"
        lines.append(f"{indent}{sel}{sep}")
    for d in rule.declarations:
        lines.append(f"{indent}  {d.prop}: {d.resolve(tokens)};")
    lines.append(f"{indent}}}")
    return lines


def compile_css(rule_set: RuleSet, tokens: ThemeTokens = DEFAULT_TOKENS) -> str:
    """Render rules to CSS in source order.

    Consecutive rules sharing a media condition are emitted inside one
    ``@media`` block, so source order (and therefore the cascade) is preserved.
    """
    lines: list[str] = [HEADER.rstrip("\n")]
    i = 0
    rules = rule_set.rules
    while i < len(rules):
        rule = rules[i]
        lines.append("")
        if rule.media is None:
            lines.extend(_format_rule(rule, tokens))
            i += 1
            continue

        media = rule.media
        lines.append(f"{media.css(tokens)} {{")
        first = True
        while i < len(rules) and rules[i].media == media:
            if not first:
                lines.append("")
            lines.extend(_format_rule(rules[i], tokens, indent="  "))
            first = False
            i += 1
        lines.append("}")

    return "\n".join(lines) + "\n"


def write_css(rule_set: RuleSet, out_path: Path, tokens: ThemeTokens = DEFAULT_TOKENS) -> Path:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(compile_css(rule_set, tokens), encoding="utf-8")
    return out_path


def audit(rule_set: RuleSet, tokens: ThemeTokens = DEFAULT_TOKENS) -> list[str]:
    """Check that every rule resolves from tokens and targets renderer markup.

    Returns:
        List of problems (empty when the rule set is clean)
    """
    problems: list[str] = []
    for rule in rule_set:
        where = rule.selector_text().replace("\n", " ")

        for selector in rule.selectors:
            for part in selector.parts:
                if part.tag and part.tag not in RENDERER_TAGS:
                    problems.append(f"{where}: <{part.tag}> is not produced by the markdown renderer")

        if rule.media is not None:
            try:
                rule.media.css(tokens)
            except (ThemeError, UnknownTokenError) as e:
                problems.append(f"{where}: media condition: {e}")

        for d in rule.declarations:
            try:
                d.resolve(tokens)
            except (ThemeError, UnknownTokenError) as e:
                problems.append(f"{where}: {d.prop}: {e}")

    return problems


def unused_tokens(rule_set: RuleSet, tokens: ThemeTokens = DEFAULT_TOKENS) -> list[str]:
    """Tokens defined in the theme but never referenced by a rule."""
    used = rule_set.token_names()
    return [name for name in tokens.table() if name not in used]
