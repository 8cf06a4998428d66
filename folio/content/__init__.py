"""Markdown articles: front matter, loading, checks and the content manifest."""

from .documents import Document, check_documents, load_document, load_documents, slugify, tag_index
from .frontmatter import FrontMatter, FrontMatterError, parse_document
from .manifest import ContentManifest, DocumentInfo, create_manifest, write_manifest

__all__ = [
    "Document",
    "check_documents",
    "load_document",
    "load_documents",
    "slugify",
    "tag_index",
    "FrontMatter",
    "FrontMatterError",
    "parse_document",
    "ContentManifest",
    "DocumentInfo",
    "create_manifest",
    "write_manifest",
]
