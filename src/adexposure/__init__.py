"""adexposure - Advertising-identifier exposure diagnostic."""

__version__ = "0.1.0"
