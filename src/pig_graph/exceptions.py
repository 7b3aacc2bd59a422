"""
Exceptions
===========
Errors raised for programming mistakes.

Data problems (malformed ids, wrong array shapes, schema failures) are never
raised; they are reported as :class:`pig_graph.messages.Status` values.
"""

from __future__ import annotations


class PigError(Exception):
    """Base class for errors that indicate a caller or integration bug."""


class ItemTypeError(PigError, TypeError):
    """An abstract item class was instantiated, or an item has the wrong type tag."""


class ImmutableFieldError(PigError, AttributeError):
    """A committed item field was assigned directly instead of through ``set()``."""
