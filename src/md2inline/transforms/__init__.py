#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2inline/transforms/__init__.py
"""Document transforms applied between parsing and rendering.

- extensions: note blocks and the footer region
- preview_cards: standalone links replaced by preview cards

Examples
--------
    >>> from md2inline.transforms import apply_extensions
    >>> doc = apply_extensions(MarkdownParser().parse(text))

"""

from md2inline.transforms.extensions import NOTE_CLOSE_MARKER, ExtensionTransformer, apply_extensions
from md2inline.transforms.preview_cards import PreviewCardTransformer, PreviewData, apply_preview_cards

__all__ = [
    "NOTE_CLOSE_MARKER",
    "ExtensionTransformer",
    "PreviewCardTransformer",
    "PreviewData",
    "apply_extensions",
    "apply_preview_cards",
]
