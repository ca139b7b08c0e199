"""Failure types raised by the reading service and its collaborators."""

from __future__ import annotations


class ReadingValidationError(ValueError):
    """A submitted reading could not be parsed. Reported to the client as a 400."""


class StoreError(RuntimeError):
    """The readings table could not complete an operation."""


class RenderError(RuntimeError):
    """The chart renderer failed on a non-empty dataset."""
