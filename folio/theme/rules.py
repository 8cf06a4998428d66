"""Style rules: selectors mapped to declarations, optionally under a media condition."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from .selectors import Element, Selector, parse_selector_list
from .values import Keyword, Length, ThemeError, Term, TokenRef, format_value, ref

if TYPE_CHECKING:
    from .tokens import ThemeTokens


@dataclass(frozen=True)
class Media:
    """A viewport condition. Only "narrower than a breakpoint token" is needed."""

    below: str  # breakpoint token name

    @classmethod
    def below_token(cls, name: str) -> Media:
        ref(name)  # fail fast on unknown names
        return cls(below=name)

    def _breakpoint(self, tokens: ThemeTokens) -> Length:
        bp = tokens.get(self.below)
        if not isinstance(bp, Length) or bp.unit != "px":
            raise ThemeError(f"Breakpoint token {self.below} must be a px length")
        return bp

    def matches(self, viewport_width: float, tokens: ThemeTokens) -> bool:
        return viewport_width < self._breakpoint(tokens).amount

    def css(self, tokens: ThemeTokens) -> str:
        # range syntax keeps "strictly below" exact for fractional widths
        return f"@media (width < {self._breakpoint(tokens)})"


TermLike = Union[Term, str]


@dataclass(frozen=True)
class Declaration:
    prop: str
    terms: tuple[Term, ...]

    def resolve(self, tokens: ThemeTokens) -> str:
        parts = []
        for term in self.terms:
            if isinstance(term, TokenRef):
                parts.append(format_value(term.resolve(tokens)))
            else:
                parts.append(term.resolve(tokens))
        return " ".join(parts)

    def token_refs(self) -> tuple[TokenRef, ...]:
        return tuple(t for t in self.terms if isinstance(t, TokenRef))

    def __str__(self) -> str:
        return f"{self.prop}: {' '.join(str(t) for t in self.terms)}"


def decl(prop: str, *terms: TermLike) -> Declaration:
    """Build a declaration; plain strings become keywords (and are checked for magic literals)."""
    if not terms:
        raise ThemeError(f"Declaration {prop!r} has no value")
    converted: list[Term] = []
    for t in terms:
        if isinstance(t, (TokenRef, Keyword)):
            converted.append(t)
        elif isinstance(t, str):
            converted.append(Keyword(t))
        else:
            raise ThemeError(f"Invalid term {t!r} for {prop!r}: use a token reference")
    return Declaration(prop, tuple(converted))


@dataclass(frozen=True)
class Rule:
    selectors: tuple[Selector, ...]
    declarations: tuple[Declaration, ...]
    media: Media | None
    order: int

    def applies(self, viewport_width: float, tokens: ThemeTokens) -> bool:
        return self.media is None or self.media.matches(viewport_width, tokens)

    def selector_text(self) -> str:
        return ",\n".join(str(s) for s in self.selectors)


class RuleSet:
    """An ordered list of rules.

    Source order is the tie-breaker of the cascade, so rules are kept exactly
    in the order they were added.
    """

    def __init__(self) -> None:
        self._rules: list[Rule] = []
        self._media: Media | None = None

    def add(self, selector: str, *declarations: Declaration) -> Rule:
        if not declarations:
            raise ThemeError(f"Rule {selector!r} has no declarations")
        rule = Rule(
            selectors=parse_selector_list(selector),
            declarations=tuple(declarations),
            media=self._media,
            order=len(self._rules),
        )
        self._rules.append(rule)
        return rule

    @contextmanager
    def media(self, media: Media) -> Iterator[RuleSet]:
        if self._media is not None:
            raise ThemeError("Nested media conditions are not supported")
        self._media = media
        try:
            yield self
        finally:
            self._media = None

    @property
    def rules(self) -> tuple[Rule, ...]:
        return tuple(self._rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def token_names(self) -> set[str]:
        names: set[str] = set()
        for rule in self._rules:
            if rule.media is not None:
                names.add(rule.media.below)
            for d in rule.declarations:
                for r in d.token_refs():
                    names.update(r.names())
        return names

    def compute(self, element: Element, viewport_width: float, tokens: ThemeTokens | None = None) -> dict[str, str]:
        """Resolve the visual properties of an element at a viewport width."""
        from .cascade import compute_style

        return compute_style(self, element, viewport_width, tokens)
