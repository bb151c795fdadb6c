"""Asynchronous HTTP/1.1 request routing, parsing and pluggable serialization."""

__version__ = "0.1.0"