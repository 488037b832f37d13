"""distomeasure – laser-meter friendly window measurement toolkit."""

from ._version import __version__

__all__ = [
    "__version__",
    "cli",
    "config",
    "formatting",
    "models",
    "parsers",
    "selection",
    "service",
    "storage",
    "utils",
    "workflow",
]
