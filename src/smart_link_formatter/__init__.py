"""Smart Link Formatter: turns pasted URLs into formatted markdown links."""

__version__ = "0.1.0"
