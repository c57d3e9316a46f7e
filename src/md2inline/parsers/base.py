#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2inline/parsers/base.py
"""Base class for Markdown parsers.

The BaseParser fixes the interface shared by parsers: validated options, a
``parse`` method returning a :class:`~md2inline.ast.Document`, and loading of
text from the input types the public API accepts.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Any, Union

from md2inline.ast import Document
from md2inline.exceptions import ParsingError
from md2inline.options.base import validate_options_type

logger = logging.getLogger(__name__)

ParserInput = Union[str, Path, IO[str], IO[bytes], bytes]


class BaseParser(ABC):
    """Abstract base class for parsers.

    Parameters
    ----------
    options : Any
        Parser options; subclasses validate the concrete type

    """

    def __init__(self, options: Any) -> None:
        """Store the parser options."""
        self.options = options

    @staticmethod
    def _validate_options_type(options: Any, expected_type: type, parser_name: str) -> None:
        """Raise InvalidOptionsError when ``options`` is not an ``expected_type``."""
        validate_options_type(options, expected_type, parser_name)

    @staticmethod
    def _load_text_content(input_data: ParserInput) -> str:
        """Load Markdown text from a string, path, bytes or file object.

        Strings are always treated as Markdown source, never as paths; pass a
        :class:`~pathlib.Path` to read a file.

        Parameters
        ----------
        input_data : str, Path, bytes or file-like
            Input to load

        Returns
        -------
        str
            Markdown text

        Raises
        ------
        ParsingError
            If the input cannot be read or decoded as UTF-8

        """
        try:
            if isinstance(input_data, str):
                return input_data
            if isinstance(input_data, Path):
                return input_data.read_text(encoding="utf-8")
            if isinstance(input_data, (bytes, bytearray)):
                return bytes(input_data).decode("utf-8")
            data = input_data.read()
            return data.decode("utf-8") if isinstance(data, bytes) else data
        except (OSError, UnicodeDecodeError) as e:
            raise ParsingError(f"Failed to read Markdown input: {e}", parsing_stage="input", original_error=e) from e

    @abstractmethod
    def parse(self, input_data: ParserInput) -> Document:
        """Parse the input into a Document.

        Parameters
        ----------
        input_data : str, Path, bytes or file-like
            Markdown input

        Returns
        -------
        Document
            AST document node

        """
        pass
