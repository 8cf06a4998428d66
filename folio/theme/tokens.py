"""Theme token table.

Every color, size, spacing unit, font stack and breakpoint used by the rule
set is defined here exactly once. Rules reference tokens by name.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Annotated, Any

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    InstanceOf,
    PlainSerializer,
    ValidationError,
)

from .values import Length, ThemeError, TokenValue, UnknownTokenError, format_value

_HEX_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")


def _check_color(value: str) -> str:
    if not _HEX_RE.match(value):
        raise ValueError(f"not a hex color: {value!r}")
    return value.lower()


def _check_font_stack(value: tuple[str, ...]) -> tuple[str, ...]:
    if not value or any(not f.strip() for f in value):
        raise ValueError("font stack must list at least one non-empty family")
    return value


Color = Annotated[str, AfterValidator(_check_color)]
Size = Annotated[InstanceOf[Length], BeforeValidator(Length.coerce), PlainSerializer(str, return_type=str)]
FontStack = Annotated[tuple[str, ...], AfterValidator(_check_font_stack)]


class ThemeTokens(BaseModel):
    """Named design constants for the blog theme."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    # Colors
    color_text: Color = "#2e353f"
    color_heading: Color = "#1a202c"
    color_background: Color = "#ffffff"
    color_link: Color = "#d23669"
    color_border: Color = "#e1e4e8"
    color_quote_border: Color = "#ffa7c4"
    color_quote_text: Color = "#4f5969"
    color_code_background: Color = "#011627"
    color_code_text: Color = "#d6deeb"
    color_inline_code_background: Color = "#fff4d1"
    color_inline_code_text: Color = "#1a1a1a"
    color_highlight_background: Color = "#022a4b"
    color_highlight_bar: Color = "#ffa7c4"
    color_table_stripe: Color = "#f6f8fa"

    # Font families
    font_sans: FontStack = (
        "Montserrat",
        "system-ui",
        "-apple-system",
        "Segoe UI",
        "Roboto",
        "sans-serif",
    )
    font_serif: FontStack = ("Merriweather", "Georgia", "Cambria", "Times New Roman", "serif")
    font_mono: FontStack = ("Consolas", "Menlo", "Monaco", "source-code-pro", "Courier New", "monospace")

    # Font sizes and weights
    font_size_base: Size = Length(18, "px")
    font_size_h1: Size = Length(2, "rem")
    font_size_h2: Size = Length(1.5, "rem")
    font_size_h3: Size = Length(1.25, "rem")
    font_size_h4: Size = Length(1, "rem")
    font_size_h5: Size = Length(0.8333, "rem")
    font_size_small: Size = Length(0.8333, "rem")
    font_size_code: Size = Length(0.85, "em")
    font_weight_body: float = 400
    font_weight_heading: float = 900

    # Line heights (unitless)
    line_height: float = 1.75
    line_height_heading: float = 1.1

    # Spacing
    padding: Size = Length(1.3125, "rem")
    spacing_block: Size = Length(1.75, "rem")
    spacing_small: Size = Length(0.4375, "rem")
    spacing_inline_code: Size = Length(0.2, "em")
    list_indent: Size = Length(1.75, "rem")
    border_radius: Size = Length(0.3, "em")
    border_width: Size = Length(1, "px")
    accent_bar_width: Size = Length(0.25, "em")
    quote_bar_width: Size = Length(0.32813, "rem")
    content_max_width: Size = Length(42, "rem")
    full_width: Size = Length(100, "%")
    tab_size: float = 2

    # Breakpoints
    breakpoint_phone: Size = Length(672, "px")

    def table(self) -> Mapping[str, TokenValue]:
        """Return the read-only token name -> value mapping, in definition order."""
        return MappingProxyType({name: getattr(self, name) for name in type(self).model_fields})

    def get(self, name: str) -> TokenValue:
        if name not in type(self).model_fields:
            raise UnknownTokenError(name)
        return getattr(self, name)

    def css(self, name: str) -> str:
        """Return the CSS text of a single token."""
        return format_value(self.get(name))

    def with_overrides(self, overrides: Mapping[str, Any]) -> ThemeTokens:
        """Return a copy with some tokens replaced (validated)."""
        data = dict(self.table())
        data.update(overrides)
        try:
            return ThemeTokens.model_validate(data)
        except ValidationError as e:
            raise ThemeError(_describe(e)) from e


def _describe(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        loc = ".".join(str(x) for x in err.get("loc", ())) or "tokens"
        parts.append(f"{loc}: {err.get('msg')}")
    return "Invalid theme tokens: " + "; ".join(parts)


DEFAULT_TOKENS = ThemeTokens()


def load_tokens(path: Path | None = None) -> ThemeTokens:
    """Load the theme, applying overrides from a JSON object file when given.

    Args:
        path: Optional JSON file mapping token names to values
            (``{"padding": "1rem", "color_link": "#0b5ed7"}``)

    Returns:
        Validated ThemeTokens
    """
    if path is None:
        return DEFAULT_TOKENS
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ThemeError(f"Invalid JSON in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ThemeError(f"Token overrides in {path} must be a JSON object")
    unknown = sorted(k for k in data if k not in ThemeTokens.model_fields)
    if unknown:
        raise UnknownTokenError(unknown[0])
    return DEFAULT_TOKENS.with_overrides(data)
