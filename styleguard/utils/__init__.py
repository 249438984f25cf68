"""Utility helpers for the lint engine."""

from .fileio import read_yaml_file, read_text_file
from .code import iter_code_files, resolve_inputs

__all__ = [
    "read_yaml_file",
    "read_text_file",
    "iter_code_files",
    "resolve_inputs",
]
