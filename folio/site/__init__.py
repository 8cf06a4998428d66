"""Static HTML output: the style specimen page."""

from .specimen import render_specimen, write_specimen

__all__ = ["render_specimen", "write_specimen"]
