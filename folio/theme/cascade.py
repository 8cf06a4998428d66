"""Cascade resolution: which declaration wins for each property of an element."""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

from .selectors import Element, Specificity
from .tokens import DEFAULT_TOKENS, ThemeTokens

if TYPE_CHECKING:
    from .rules import Declaration, Rule, RuleSet


class Match(NamedTuple):
    """A rule matching an element, with the specificity of its best selector."""

    specificity: Specificity
    order: int
    rule: Rule


def matching_rules(
    rule_set: RuleSet,
    element: Element,
    viewport_width: float,
    tokens: ThemeTokens = DEFAULT_TOKENS,
) -> list[Match]:
    """Rules that apply to the element, in ascending cascade precedence."""
    matches: list[Match] = []
    for rule in rule_set:
        if not rule.applies(viewport_width, tokens):
            continue
        best: Specificity | None = None
        for selector in rule.selectors:
            if selector.matches(element):
                spec = selector.specificity
                if best is None or spec > best:
                    best = spec
        if best is not None:
            matches.append(Match(best, rule.order, rule))
    matches.sort(key=lambda m: (m.specificity, m.order))
    return matches


def winning_declarations(
    rule_set: RuleSet,
    element: Element,
    viewport_width: float,
    tokens: ThemeTokens = DEFAULT_TOKENS,
) -> dict[str, Declaration]:
    winners: dict[str, Declaration] = {}
    for match in matching_rules(rule_set, element, viewport_width, tokens):
        for declaration in match.rule.declarations:
            # Later entries have higher precedence.
            winners[declaration.prop] = declaration
    return winners


def compute_style(
    rule_set: RuleSet,
    element: Element,
    viewport_width: float,
    tokens: ThemeTokens | None = None,
) -> dict[str, str]:
    """Compute the deterministic set of visual properties for an element.

    Args:
        rule_set: Rules in source order
        element: Element produced by the markdown renderer
        viewport_width: Viewport width in px
        tokens: Theme tokens (defaults to the blog theme)

    Returns:
        Mapping of property name to resolved CSS value, sorted by property.
        Empty when no rule matches (user agent defaults apply).
    """
    if tokens is None:
        tokens = DEFAULT_TOKENS
    winners = winning_declarations(rule_set, element, viewport_width, tokens)
    return {prop: winners[prop].resolve(tokens) for prop in sorted(winners)}
