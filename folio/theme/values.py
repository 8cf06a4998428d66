"""Value algebra for theme tokens and declarations.

A declaration value is a sequence of terms. Each term is either a reference
to a theme token (optionally scaled) or a bare CSS keyword. Numbers and
colors never appear as keywords; they must come from the token table.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import total_ordering
from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    from .tokens import ThemeTokens


class ThemeError(ValueError):
    """Raised for invalid token values, arithmetic or literals."""


class UnknownTokenError(KeyError):
    """Raised when a token name is not defined in the theme."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown theme token: {self.name}"


UNITS = ("px", "rem", "em", "%", "vw", "vh")

_LENGTH_RE = re.compile(r"^\s*(-?(?:\d+\.?\d*|\.\d+))\s*(px|rem|em|%|vw|vh)?\s*$")

# Anything numeric or color-like is a magic literal when written as a keyword.
_MAGIC_RE = re.compile(
    r"^[+-]?(?:\d+\.?\d*|\.\d+)[a-z%]*$"
    r"|^#[0-9a-fA-F]{3,8}$"
    r"|^(?:rgb|rgba|hsl|hsla)\(",
    re.IGNORECASE,
)


def format_number(value: float) -> str:
    """Format a number in its shortest exact form (1.0 -> "1", 0.32813 -> "0.32813")."""
    if value == 0:
        return "0"
    value = float(value)
    if value.is_integer():
        return str(int(value))
    text = repr(value)
    if "e" in text:
        # CSS numbers have no exponent form
        text = f"{value:.20f}"
    return text.rstrip("0").rstrip(".")


@total_ordering
@dataclass(frozen=True)
class Length:
    """A CSS length: an amount and a unit."""

    amount: float
    unit: str = "px"

    def __post_init__(self) -> None:
        if self.unit not in UNITS:
            raise ThemeError(f"Unsupported unit: {self.unit!r}")

    @classmethod
    def parse(cls, text: str) -> Length:
        """Parse CSS text such as ``-1.3125rem``, ``24px`` or ``0``."""
        m = _LENGTH_RE.match(str(text))
        if not m:
            raise ThemeError(f"Not a length: {text!r}")
        amount = float(m.group(1))
        unit = m.group(2)
        if unit is None:
            if amount != 0:
                raise ThemeError(f"Length needs a unit: {text!r}")
            unit = "px"
        return cls(amount, unit)

    @classmethod
    def coerce(cls, value: Any) -> Any:
        """Pydantic before-validator: accept strings and ``{"amount", "unit"}`` dicts."""
        if isinstance(value, str):
            return cls.parse(value)
        if isinstance(value, dict):
            return cls(float(value["amount"]), str(value.get("unit", "px")))
        return value

    def _same_unit(self, other: Length) -> None:
        if self.unit != other.unit and self.amount != 0 and other.amount != 0:
            raise ThemeError(f"Cannot combine {self} and {other}: unit mismatch")

    def __mul__(self, factor: float) -> Length:
        if isinstance(factor, bool) or not isinstance(factor, (int, float)):
            return NotImplemented
        return Length(self.amount * factor, self.unit)

    __rmul__ = __mul__

    def __neg__(self) -> Length:
        return Length(-self.amount, self.unit)

    def __add__(self, other: Length) -> Length:
        if not isinstance(other, Length):
            return NotImplemented
        self._same_unit(other)
        unit = self.unit if self.amount != 0 else other.unit
        return Length(self.amount + other.amount, unit)

    def __sub__(self, other: Length) -> Length:
        if not isinstance(other, Length):
            return NotImplemented
        return self + (-other)

    def __lt__(self, other: Length) -> bool:
        if not isinstance(other, Length):
            return NotImplemented
        self._same_unit(other)
        return self.amount < other.amount

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Length):
            return NotImplemented
        if self.amount == 0 and other.amount == 0:
            return True
        return self.amount == other.amount and self.unit == other.unit

    def __hash__(self) -> int:
        if self.amount == 0:
            return hash(0.0)
        return hash((self.amount, self.unit))

    def __str__(self) -> str:
        if self.amount == 0:
            return "0"
        return f"{format_number(self.amount)}{self.unit}"


TokenValue = Union[str, float, Length, tuple]


def format_value(value: TokenValue) -> str:
    """Render a resolved token value as CSS text."""
    if isinstance(value, Length):
        return str(value)
    if isinstance(value, bool):
        raise ThemeError(f"Not a CSS value: {value!r}")
    if isinstance(value, (int, float)):
        return format_number(value)
    if isinstance(value, tuple):
        # Font stack
        return ", ".join(f'"{f}"' if " " in f else f for f in value)
    return str(value)


@dataclass(frozen=True)
class TokenRef:
    """A reference to a theme token with simple arithmetic applied.

    ``ref("padding") * -1`` and ``ref("font_size_base") * ref("line_height")``
    are both valid; the second multiplies by a unitless token.
    """

    name: str
    scale: float = 1.0
    factors: tuple[str, ...] = ()

    def __mul__(self, other: Any) -> TokenRef:
        if isinstance(other, TokenRef):
            if other.factors:
                raise ThemeError("Only a single unitless factor reference can be chained")
            return TokenRef(self.name, self.scale * other.scale, self.factors + (other.name,))
        if isinstance(other, bool) or not isinstance(other, (int, float)):
            return NotImplemented
        return TokenRef(self.name, self.scale * other, self.factors)

    __rmul__ = __mul__

    def __neg__(self) -> TokenRef:
        return TokenRef(self.name, -self.scale, self.factors)

    def names(self) -> tuple[str, ...]:
        return (self.name,) + self.factors

    def resolve(self, tokens: ThemeTokens) -> TokenValue:
        value = tokens.get(self.name)
        scale = self.scale
        for factor_name in self.factors:
            factor = tokens.get(factor_name)
            if isinstance(factor, bool) or not isinstance(factor, (int, float)):
                raise ThemeError(f"Token {factor_name} is not a unitless number")
            scale *= factor
        if scale == 1.0:
            return value
        if isinstance(value, Length):
            return value * scale
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return value * scale
        raise ThemeError(f"Cannot apply arithmetic to token {self.name} ({value!r})")

    def __str__(self) -> str:
        expr = "$" + self.name
        for f in self.factors:
            expr += f" * ${f}"
        if self.scale == -1.0:
            return "-" + expr
        if self.scale != 1.0:
            expr += f" * {format_number(self.scale)}"
        return expr


@dataclass(frozen=True)
class Keyword:
    """A bare CSS keyword such as ``block``, ``solid`` or ``nowrap``."""

    text: str

    def __post_init__(self) -> None:
        if not self.text or not self.text.strip():
            raise ThemeError("Empty keyword")
        if self.text != "0" and _MAGIC_RE.match(self.text):
            raise ThemeError(f"Magic literal {self.text!r}: define a theme token instead")

    def resolve(self, tokens: ThemeTokens) -> str:
        return self.text

    def __str__(self) -> str:
        return self.text


Term = Union[TokenRef, Keyword]


def ref(name: str) -> TokenRef:
    """Reference a theme token by name, failing fast for undefined names."""
    from .tokens import ThemeTokens

    if name not in ThemeTokens.model_fields:
        raise UnknownTokenError(name)
    return TokenRef(name)
