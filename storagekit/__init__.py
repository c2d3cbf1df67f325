"""File-system interface with a directory-backed implementation, FAT timestamps, path handling, line reading and a self-test."""

__version__ = "0.1.0"

__all__ = ["base", "fattime", "linereader", "localfs", "paths", "selftest"]