"""Show how the sections of an ESP firmware image sit in the chip's memory map."""

__version__ = "0.3.0"
