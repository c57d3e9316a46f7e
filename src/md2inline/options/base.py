#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2inline/options/base.py
"""Base classes for parser, renderer and fetcher options.

Every options object in md2inline is a frozen dataclass. Modified copies are
produced with :meth:`CloneFrozenMixin.create_updated` rather than by mutation.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from md2inline.exceptions import InvalidOptionsError


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)

    @classmethod
    def describe_fields(cls) -> dict[str, str]:
        """Return the help text of every field, keyed by field name."""
        return {f.name: f.metadata.get("help", "") for f in fields(cls)}


def validate_options_type(options: object | None, expected_type: type, component_name: str) -> None:
    """Validate that options are of the correct type for a component.

    Parameters
    ----------
    options : object or None
        The options object to validate
    expected_type : type
        The expected options class type
    component_name : str
        Name of the component (for error messages)

    Raises
    ------
    InvalidOptionsError
        If options are not None and not an instance of expected_type

    """
    if options is not None and not isinstance(options, expected_type):
        raise InvalidOptionsError(
            component_name=component_name,
            expected_type=expected_type,
            received_type=type(options),
        )
