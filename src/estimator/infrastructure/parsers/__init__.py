"""File parsers."""

from .import_parser import parse_import_file

__all__ = ["parse_import_file"]
