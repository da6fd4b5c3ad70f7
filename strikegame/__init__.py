"""A networked five-action strike game with a TCP client and server."""

__version__ = "0.1.0"