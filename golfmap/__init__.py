"""Golf venue layout model: hole groups, course composition and variants."""

__version__ = "0.1.0"
