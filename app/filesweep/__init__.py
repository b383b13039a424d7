"""filesweep - Walk a directory tree and list, archive or delete matching files."""

__version__ = "0.1.0"
