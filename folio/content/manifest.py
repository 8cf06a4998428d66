"""Content manifest consumed by the external site generator."""

import json
from datetime import UTC, datetime
from pathlib import Path

from pydantic import BaseModel

from ..config import MANIFEST_NAME, SCHEMA_VERSION, THEME_VERSION
from .documents import Document, compute_sha256, sort_documents, tag_index


class DocumentInfo(BaseModel):
    """Document metadata in manifest."""

    slug: str
    title: str
    date: str
    description: str
    tags: list[str]
    path: str
    sha256: str


class ContentManifest(BaseModel):
    """Index of published articles, their tags and the stylesheet hash."""

    schema_version: int = SCHEMA_VERSION
    theme_version: str = THEME_VERSION
    generated_at: datetime
    documents: list[DocumentInfo]
    tags: dict[str, list[str]]  # tag -> slugs
    stylesheet_sha256: str | None = None


def create_manifest(documents: list[Document], stylesheet: str | None = None) -> ContentManifest:
    """Create a manifest for a set of documents.

    Args:
        documents: Loaded documents (any order; the manifest lists newest first)
        stylesheet: Compiled CSS to fingerprint, if any

    Returns:
        Populated ContentManifest
    """
    ordered = sort_documents(documents)

    # Determinism: use a stable timestamp derived from the newest document date.
    if ordered:
        newest = ordered[0].front_matter.date
        stable_at = datetime(newest.year, newest.month, newest.day, tzinfo=UTC)
    else:
        stable_at = datetime(1970, 1, 1, tzinfo=UTC)

    infos = [
        DocumentInfo(
            slug=doc.slug,
            title=doc.front_matter.title,
            date=doc.front_matter.date.isoformat(),
            description=doc.front_matter.description,
            tags=sorted(doc.front_matter.tags),
            path=doc.path,
            sha256=doc.sha256,
        )
        for doc in ordered
    ]

    return ContentManifest(
        generated_at=stable_at,
        documents=infos,
        tags=tag_index(ordered),
        stylesheet_sha256=compute_sha256(stylesheet) if stylesheet is not None else None,
    )


def write_manifest(manifest: ContentManifest, output_dir: Path) -> Path:
    """Write manifest to JSON file.

    Args:
        manifest: Manifest object
        output_dir: Directory to write to

    Returns:
        Path to written manifest file
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    manifest_path = output_dir / MANIFEST_NAME
    payload = manifest.model_dump(mode="json")
    manifest_path.write_text(
        json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False) + "\n",
        encoding="utf-8",
    )
    return manifest_path
