"""Renderers for ComposerDiff."""
