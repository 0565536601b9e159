"""Buffered writer for the Avro binary encoding."""

__version__ = "0.1.0"
__all__ = ["writer"]