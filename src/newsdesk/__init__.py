"""Newsdesk - news collection and LLM enrichment into dated editions."""

from newsdesk.__version__ import __version__

__all__ = ["__version__"]
