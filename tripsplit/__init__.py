"""Balance and settlement engine for shared trip expenses."""

__version__ = "1.0.0"
