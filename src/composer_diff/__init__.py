"""composer-rich-diff — semantic diffs of composer.json / composer.lock changes."""

__version__ = "1.0.0"
