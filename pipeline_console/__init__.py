"""Operator console for the parse/document/embed/ask repository pipeline."""

__version__ = "0.1.0"
