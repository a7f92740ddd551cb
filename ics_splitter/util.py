"""Utility methods used by multiple modules."""

from __future__ import annotations

from importlib import metadata

__all__ = [
    "prodid_factory",
]


PRODID = "ics-splitter"
VERSION = metadata.version("ics-splitter")


def prodid_factory() -> str:
    """Return the product identifier to facilitate mocking."""
    return f"-//{PRODID}//{VERSION}//EN"
