"""
Utilitários compartilhados do conversor.
"""

from .file_helpers import atomic_write, cleanup_temp_file, require_input_file, resolve_output_path
from .pages import parse_page_selection, resolve_pages
from .text_utils import collapse_whitespace, parse_brazilian_number, strip_accents, to_snake_case

__all__ = [
    "atomic_write",
    "cleanup_temp_file",
    "require_input_file",
    "resolve_output_path",
    "parse_page_selection",
    "resolve_pages",
    "collapse_whitespace",
    "parse_brazilian_number",
    "strip_accents",
    "to_snake_case",
]
