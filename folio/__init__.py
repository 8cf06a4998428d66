"""Folio: theme and content toolkit for a personal blog."""

__version__ = "0.3.0"
