"""
.. include:: ../README.md
"""

__all__ = [
    "dates",
    "exceptions",
    "model",
    "options",
    "outputs",
    "parser",
    "split",
    "statistics",
    "util",
    "writer",
]
