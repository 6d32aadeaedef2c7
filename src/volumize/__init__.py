# -*- coding: utf-8 -*-
"""Volumes of solids with known cross-sections, and their slice geometry."""

from importlib.metadata import PackageNotFoundError, version


try:
    __version__ = version("volumize")
except PackageNotFoundError:  # pragma: no cover - handled when package not installed
    __version__ = "unknown"
