"""LXB (FCS3.0) file decoder."""

__version__ = "0.1.0"
