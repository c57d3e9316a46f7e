#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2inline/utils/__init__.py
"""Utility helpers shared by the renderer and the preview fetcher."""
