"""Loading and checking the blog's markdown articles."""

from __future__ import annotations

import hashlib
import re
from collections.abc import Iterable
from pathlib import Path

from pydantic import BaseModel

from .frontmatter import FrontMatter, FrontMatterError, parse_document


class Document(BaseModel):
    """A published article: front matter plus markdown body."""

    slug: str
    path: str
    front_matter: FrontMatter
    body: str
    sha256: str

    @property
    def title(self) -> str:
        return self.front_matter.title

    @property
    def tags(self) -> frozenset[str]:
        return self.front_matter.tags


def slugify(text: str, max_len: int = 80) -> str:
    """Convert text to a URL-safe slug.

    Args:
        text: Text to convert
        max_len: Maximum length of slug

    Returns:
        Lowercase slug with hyphens
    """
    text = text.lower()
    text = text.replace("&", "-and-")
    # Keep only alphanumeric, whitespace, hyphens and underscores
    text = re.sub(r"[^a-z0-9\s_-]", "", text)
    text = re.sub(r"[\s_]+", "-", text)
    text = re.sub(r"-+", "-", text)
    text = text.strip("-")
    if len(text) > max_len:
        text = text[:max_len].rstrip("-")
    return text


def compute_sha256(content: bytes | str) -> str:
    if isinstance(content, str):
        content = content.encode("utf-8")
    return hashlib.sha256(content).hexdigest()


def document_slug(path: Path) -> str:
    """``blog/hello-world/index.md`` -> ``hello-world``; ``blog/notes.md`` -> ``notes``."""
    name = path.parent.name if path.stem == "index" else path.stem
    return slugify(name)


def load_document(path: Path, root: Path | None = None) -> Document:
    """Load one article.

    Raises:
        FrontMatterError: with the file path prefixed to the message
    """
    text = path.read_text(encoding="utf-8")
    try:
        front_matter, body = parse_document(text)
    except FrontMatterError as e:
        raise FrontMatterError(f"{path}: {e}") from e

    rel = path.relative_to(root) if root is not None else path
    return Document(
        slug=document_slug(path),
        path=rel.as_posix(),
        front_matter=front_matter,
        body=body,
        sha256=compute_sha256(text),
    )


def find_documents(root: Path) -> list[Path]:
    if not root.exists():
        return []
    return sorted(p for p in root.rglob("*.md") if p.is_file())


def sort_documents(documents: Iterable[Document]) -> list[Document]:
    """Newest first; same-day articles ordered by slug."""
    by_slug = sorted(documents, key=lambda d: d.slug)
    return sorted(by_slug, key=lambda d: d.front_matter.date, reverse=True)


def load_documents(root: Path) -> list[Document]:
    """Load every article under a content directory, newest first.

    Raises:
        FrontMatterError: on the first invalid document
    """
    return sort_documents(load_document(p, root) for p in find_documents(root))


def check_documents(root: Path) -> tuple[list[Document], list[str]]:
    """Load what can be loaded and collect problems instead of raising.

    Returns:
        (valid documents newest first, list of problem messages)
    """
    documents: list[Document] = []
    problems: list[str] = []

    paths = find_documents(root)
    if not paths:
        problems.append(f"No markdown documents found under {root}")

    for path in paths:
        try:
            doc = load_document(path, root)
        except FrontMatterError as e:
            problems.append(str(e))
            continue
        except UnicodeDecodeError as e:
            problems.append(f"{path}: not valid UTF-8 ({e.reason})")
            continue
        if not doc.body.strip():
            problems.append(f"{path}: empty body")
        documents.append(doc)

    seen: dict[str, str] = {}
    for doc in documents:
        if doc.slug in seen:
            problems.append(f"{doc.path}: duplicate slug '{doc.slug}' (also used by {seen[doc.slug]})")
        else:
            seen[doc.slug] = doc.path

    return sort_documents(documents), problems


def tag_index(documents: Iterable[Document]) -> dict[str, list[str]]:
    """Map each tag to the slugs carrying it, both sorted."""
    index: dict[str, set[str]] = {}
    for doc in documents:
        for tag in doc.tags:
            index.setdefault(tag, set()).add(doc.slug)
    return {tag: sorted(slugs) for tag, slugs in sorted(index.items())}
