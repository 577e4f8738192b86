"""Command line interface for DiffLog."""
