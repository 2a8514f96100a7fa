"""Typed remapping failures surfaced to the host."""

from __future__ import annotations


class RemapError(Exception):
    """Base class for failures local to one remap invocation."""


class MissingInput(RemapError):
    """Source content or target bounds are not resolved yet.

    ``remap()`` treats this state as idle and returns ``None``; with
    ``strict=True`` it raises this instead.
    """


class DegenerateContainer(RemapError, ValueError):
    """A container has zero/negative size, or mapping produced non-finite geometry."""

    def __init__(self, message: str, container: str | None = None) -> None:
        super().__init__(message)
        self.container = container
