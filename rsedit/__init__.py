"""A small terminal text editor with grapheme-aware editing and incremental search."""

__version__ = "1.5.1"