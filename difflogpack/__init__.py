"""Internal packages for DiffLog."""

__version__ = "0.1.0"
