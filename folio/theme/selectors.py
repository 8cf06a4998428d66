"""Selector parsing and matching against rendered markdown elements.

Only the subset of CSS selectors the theme needs is supported: type,
universal, class and attribute tests, a few structural pseudo-classes, and the
descendant and child combinators.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import NamedTuple


class SelectorError(ValueError):
    """Raised for selectors outside the supported grammar."""


# Tags the external markdown and highlighting pipeline produces.
RENDERER_TAGS = frozenset(
    {
        "*", "html", "body", "main", "article", "header", "footer", "div", "span",
        "p", "h1", "h2", "h3", "h4", "h5", "h6", "ul", "ol", "li",
        "table", "thead", "tbody", "tr", "th", "td", "blockquote",
        "pre", "code", "a", "hr", "img", "strong", "em", "del", "sup",
    }
)


class Specificity(NamedTuple):
    ids: int
    classes: int
    types: int

    def __add__(self, other: Specificity) -> Specificity:  # type: ignore[override]
        return Specificity(self.ids + other.ids, self.classes + other.classes, self.types + other.types)


@dataclass(frozen=True)
class Element:
    """An element of HTML produced from markdown.

    ``position`` is the 1-based index among element siblings, as used by
    ``:nth-child``.
    """

    tag: str
    classes: frozenset[str] = frozenset()
    attrs: tuple[tuple[str, str], ...] = ()
    parent: Element | None = field(default=None, repr=False)
    position: int = 1
    sibling_count: int = 1
    empty: bool = False

    def attr(self, name: str) -> str | None:
        if name == "class":
            return " ".join(sorted(self.classes)) if self.classes else None
        for key, value in self.attrs:
            if key == name:
                return value
        return None

    def child(
        self,
        tag: str,
        *classes: str,
        position: int = 1,
        sibling_count: int | None = None,
        empty: bool = False,
        **attrs: str,
    ) -> Element:
        return Element(
            tag=tag,
            classes=frozenset(classes),
            attrs=tuple(sorted(attrs.items())),
            parent=self,
            position=position,
            sibling_count=sibling_count if sibling_count is not None else max(position, 1),
            empty=empty,
        )

    def ancestors(self):
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    @classmethod
    def path(cls, text: str) -> Element:
        """Build an element chain from a path like ``table > tbody > tr:3 > td``.

        Each step is ``tag(.class)*`` optionally followed by ``:N`` (position)
        and/or ``:empty``. Steps are separated by ``>`` or whitespace.
        """
        steps = [s for s in re.split(r"\s*>\s*|\s+", text.strip()) if s]
        if not steps:
            raise SelectorError("Empty element path")
        tag, classes, position, empty = _parse_path_step(steps[0])
        node = Element(
            tag=tag,
            classes=frozenset(classes),
            position=position,
            sibling_count=position,
            empty=empty,
        )
        for step in steps[1:]:
            tag, classes, position, empty = _parse_path_step(step)
            node = node.child(tag, *classes, position=position, empty=empty)
        return node


_PATH_STEP_RE = re.compile(
    r"^(?P<tag>[a-zA-Z][\w-]*)"
    r"(?:\.(?P<classes>[\w-]+(?:\.[\w-]+)*))?"
    r"(?::(?P<pos>\d+))?"
    r"(?P<empty>:empty)?$"
)


def _parse_path_step(step: str) -> tuple[str, tuple[str, ...], int, bool]:
    m = _PATH_STEP_RE.match(step)
    if not m:
        raise SelectorError(f"Invalid element path step: {step!r}")
    tag = m.group("tag").lower()
    classes = tuple(c for c in (m.group("classes") or "").split(".") if c)
    position = int(m.group("pos")) if m.group("pos") else 1
    return tag, classes, position, bool(m.group("empty"))


@dataclass(frozen=True)
class AttrTest:
    name: str
    op: str | None = None  # None (presence), "=", "*=", "^=", "$=", "~="
    value: str = ""

    def matches(self, el: Element) -> bool:
        actual = el.attr(self.name)
        if actual is None:
            return False
        if self.op is None:
            return True
        if self.op == "=":
            return actual == self.value
        if self.op == "*=":
            return self.value in actual
        if self.op == "^=":
            return actual.startswith(self.value)
        if self.op == "$=":
            return actual.endswith(self.value)
        if self.op == "~=":
            return self.value in actual.split()
        raise SelectorError(f"Unsupported attribute operator: {self.op}")

    def __str__(self) -> str:
        if self.op is None:
            return f"[{self.name}]"
        return f'[{self.name}{self.op}"{self.value}"]'


@dataclass(frozen=True)
class NthChild:
    a: int
    b: int

    @classmethod
    def parse(cls, arg: str) -> NthChild:
        s = arg.replace(" ", "").lower()
        if s == "odd":
            return cls(2, 1)
        if s == "even":
            return cls(2, 0)
        if re.fullmatch(r"[+-]?\d+", s):
            return cls(0, int(s))
        m = re.fullmatch(r"([+-]?\d*)n([+-]\d+)?", s)
        if not m:
            raise SelectorError(f"Invalid :nth-child argument: {arg!r}")
        a_text = m.group(1)
        if a_text in ("", "+"):
            a = 1
        elif a_text == "-":
            a = -1
        else:
            a = int(a_text)
        b = int(m.group(2)) if m.group(2) else 0
        return cls(a, b)

    def matches(self, position: int) -> bool:
        if self.a == 0:
            return position == self.b
        diff = position - self.b
        return diff % self.a == 0 and diff // self.a >= 0

    def __str__(self) -> str:
        if (self.a, self.b) == (2, 1):
            return "odd"
        if (self.a, self.b) == (2, 0):
            return "even"
        if self.a == 0:
            return str(self.b)
        return f"{self.a}n{self.b:+d}" if self.b else f"{self.a}n"


@dataclass(frozen=True)
class Compound:
    """A compound selector: one element's tag, classes, attributes and pseudo-classes."""

    tag: str | None = None
    classes: tuple[str, ...] = ()
    attrs: tuple[AttrTest, ...] = ()
    nth: tuple[NthChild, ...] = ()
    pseudos: tuple[str, ...] = ()  # first-child, last-child, empty

    @property
    def specificity(self) -> Specificity:
        types = 1 if self.tag and self.tag != "*" else 0
        return Specificity(0, len(self.classes) + len(self.attrs) + len(self.nth) + len(self.pseudos), types)

    def matches(self, el: Element) -> bool:
        if self.tag and self.tag != "*" and self.tag != el.tag:
            return False
        if any(c not in el.classes for c in self.classes):
            return False
        if not all(t.matches(el) for t in self.attrs):
            return False
        if not all(n.matches(el.position) for n in self.nth):
            return False
        for pseudo in self.pseudos:
            if pseudo == "first-child" and el.position != 1:
                return False
            if pseudo == "last-child" and el.position != el.sibling_count:
                return False
            if pseudo == "empty" and not el.empty:
                return False
        return True

    def __str__(self) -> str:
        out = self.tag or ""
        out += "".join(f".{c}" for c in self.classes)
        out += "".join(str(a) for a in self.attrs)
        out += "".join(f":nth-child({n})" for n in self.nth)
        out += "".join(f":{p}" for p in self.pseudos)
        return out or "*"


_COMPOUND_PART_RE = re.compile(
    r"(?P<tag>^\*|^[a-zA-Z][\w-]*)"
    r"|\.(?P<cls>[\w-]+)"
    r"|\[(?P<attr>[\w-]+)(?:(?P<op>[*^$~]?=)(?P<q>[\"']?)(?P<val>[^\]\"']*)(?P=q))?\]"
    r"|:nth-child\((?P<nth>[^)]*)\)"
    r"|:(?P<pseudo>first-child|last-child|empty)"
)


def _parse_compound(text: str) -> Compound:
    tag = None
    classes: list[str] = []
    attrs: list[AttrTest] = []
    nth: list[NthChild] = []
    pseudos: list[str] = []

    pos = 0
    while pos < len(text):
        m = _COMPOUND_PART_RE.match(text, pos)
        if not m or m.end() == pos:
            raise SelectorError(f"Unsupported selector syntax at {text[pos:]!r} in {text!r}")
        if m.group("tag"):
            tag = m.group("tag").lower()
        elif m.group("cls"):
            classes.append(m.group("cls"))
        elif m.group("attr"):
            attrs.append(AttrTest(m.group("attr"), m.group("op"), m.group("val") or ""))
        elif m.group("nth") is not None:
            nth.append(NthChild.parse(m.group("nth")))
        elif m.group("pseudo"):
            pseudos.append(m.group("pseudo"))
        pos = m.end()

    return Compound(tag, tuple(classes), tuple(attrs), tuple(nth), tuple(pseudos))


@dataclass(frozen=True)
class Selector:
    """A complex selector: compounds joined by combinators, left to right."""

    parts: tuple[Compound, ...]
    combinators: tuple[str, ...] = ()  # " " or ">", len(parts) - 1 items

    @property
    def specificity(self) -> Specificity:
        total = Specificity(0, 0, 0)
        for part in self.parts:
            total = total + part.specificity
        return total

    @property
    def subject(self) -> Compound:
        return self.parts[-1]

    def matches(self, el: Element) -> bool:
        return self._match(len(self.parts) - 1, el)

    def _match(self, idx: int, el: Element) -> bool:
        if not self.parts[idx].matches(el):
            return False
        if idx == 0:
            return True
        if self.combinators[idx - 1] == ">":
            return el.parent is not None and self._match(idx - 1, el.parent)
        return any(self._match(idx - 1, anc) for anc in el.ancestors())

    def __str__(self) -> str:
        out = str(self.parts[0])
        for comb, part in zip(self.combinators, self.parts[1:]):
            out += " > " if comb == ">" else " "
            out += str(part)
        return out


def parse_selector(text: str) -> Selector:
    """Parse one complex selector (no commas)."""
    normalized = re.sub(r"\s*>\s*", " > ", text.strip())
    tokens = normalized.split()
    if not tokens:
        raise SelectorError("Empty selector")

    parts: list[Compound] = []
    combinators: list[str] = []
    pending = " "
    for tok in tokens:
        if tok == ">":
            if not parts or pending == ">":
                raise SelectorError(f"Dangling combinator in {text!r}")
            pending = ">"
            continue
        if parts:
            combinators.append(pending)
        parts.append(_parse_compound(tok))
        pending = " "
    if pending == ">":
        raise SelectorError(f"Dangling combinator in {text!r}")
    return Selector(tuple(parts), tuple(combinators))


def parse_selector_list(text: str) -> tuple[Selector, ...]:
    """Parse a comma-separated selector list."""
    items = [s.strip() for s in text.split(",")]
    if any(not s for s in items):
        raise SelectorError(f"Empty selector in list {text!r}")
    return tuple(parse_selector(s) for s in items)
