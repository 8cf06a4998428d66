"""Front matter parsing for markdown articles."""

from __future__ import annotations

import datetime
import re
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

_FENCE_RE = re.compile(r"\A---[ \t]*\n(.*?)\n---[ \t]*(?:\n|\Z)", re.DOTALL)


class FrontMatterError(ValueError):
    """Raised when a document's front matter is missing or invalid."""


class FrontMatter(BaseModel):
    """Metadata block at the top of an article."""

    model_config = ConfigDict(frozen=True)

    title: str
    date: datetime.date
    description: str
    tags: frozenset[str] = frozenset()

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("title must not be empty")
        return value

    @field_validator("description")
    @classmethod
    def _strip_description(cls, value: str) -> str:
        return value.strip()

    @field_validator("date", mode="before")
    @classmethod
    def _truncate_datetime(cls, value: Any) -> Any:
        # YAML turns "2019-02-14T10:00:00Z" into a datetime; keep the day.
        if isinstance(value, datetime.datetime):
            return value.date()
        if isinstance(value, str) and "T" in value:
            try:
                return datetime.datetime.fromisoformat(value.replace("Z", "+00:00")).date()
            except ValueError:
                return value
        return value

    @field_validator("tags", mode="before")
    @classmethod
    def _split_tags(cls, value: Any) -> Any:
        if value is None:
            return frozenset()
        if isinstance(value, str):
            value = value.split(",")
        if isinstance(value, (list, tuple, set, frozenset)):
            tags = set()
            for tag in value:
                if not isinstance(tag, str):
                    raise ValueError(f"tag must be a string, got {tag!r}")
                tag = tag.strip()
                if not tag:
                    raise ValueError("tags must not be empty strings")
                tags.add(tag)
            return frozenset(tags)
        return value


def split_front_matter(text: str) -> tuple[str, str]:
    """Split a document into its raw YAML block and markdown body."""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    if text.startswith("\ufeff"):
        text = text[1:]
    m = _FENCE_RE.match(text)
    if not m:
        raise FrontMatterError("missing front matter block (expected leading '---' fence)")
    return m.group(1), text[m.end():]


def parse_front_matter(raw: str) -> FrontMatter:
    try:
        data = yaml.safe_load(raw)
    except (yaml.YAMLError, ValueError) as e:
        # PyYAML raises ValueError for impossible dates such as 2020-02-30
        raise FrontMatterError(f"invalid YAML in front matter: {e}") from e
    if not isinstance(data, dict):
        raise FrontMatterError("front matter must be a mapping")
    try:
        return FrontMatter.model_validate(data)
    except ValidationError as e:
        raise FrontMatterError(_describe(e)) from e


def parse_document(text: str) -> tuple[FrontMatter, str]:
    """Parse an article into front matter and body.

    Args:
        text: Full markdown file content

    Returns:
        (FrontMatter, body markdown)

    Raises:
        FrontMatterError: if the block is missing, not YAML, or a field is invalid
    """
    raw, body = split_front_matter(text)
    return parse_front_matter(raw), body


def _describe(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        field = ".".join(str(x) for x in err.get("loc", ()))
        if err.get("type") == "missing":
            parts.append(f"missing required field '{field}'")
        else:
            parts.append(f"{field}: {err.get('msg')}")
    return "invalid front matter: " + "; ".join(parts)
