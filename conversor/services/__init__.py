"""
Serviços de conversão de documentos.
"""

from .csv_normalizer import CSVNormalizer
from .document_converter import DocumentConverter, merge_tables
from .pdf_extractor import PDFExtractor

__all__ = [
    "CSVNormalizer",
    "DocumentConverter",
    "merge_tables",
    "PDFExtractor",
]
