"""Crab CMS — content storage with pluggable persistence adapters."""

__version__ = "0.1.0"
