"""Tag-driven binding and validation of request parameters, and a binary record unpacker."""

__version__ = "0.1.0"
__all__ = ["binpack", "validation"]