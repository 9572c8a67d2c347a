"""memline - memory status line for status bars."""

__version__ = "0.1.0"
