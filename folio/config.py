"""Configuration constants and paths for Folio."""

import os
from pathlib import Path

# Articles live under content/blog/<slug>/index.md
# Override via FOLIO_CONTENT_DIR environment variable
CONTENT_DIR = Path(os.getenv("FOLIO_CONTENT_DIR", "content"))

# Where `folio css`, `folio manifest` and `folio specimen` write by default
OUTPUT_DIR = Path(os.getenv("FOLIO_OUTPUT_DIR", "public"))

# Class names emitted by the external markdown/highlighting pipeline.
# The defaults match gatsby-remark-prismjs.
HIGHLIGHT_WRAPPER_CLASS = os.getenv("FOLIO_HIGHLIGHT_WRAPPER_CLASS", "gatsby-highlight")
HIGHLIGHT_LINE_CLASS = os.getenv("FOLIO_HIGHLIGHT_LINE_CLASS", "gatsby-highlight-code-line")
LANGUAGE_CLASS_PREFIX = os.getenv("FOLIO_LANGUAGE_CLASS_PREFIX", "language-")

# Output file names
STYLESHEET_NAME = "style.css"
MANIFEST_NAME = "content.json"
SPECIMEN_NAME = "specimen.html"

# Versioning for determinism tracking
THEME_VERSION = "0.3.0"
SCHEMA_VERSION = 1
