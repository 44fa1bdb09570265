"""
Modelos compartilhados do conversor.

Centraliza enums e dataclasses usados pelos serviços e pela CLI.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List


class OutputFormat(str, Enum):
    """Formatos de saída suportados."""
    CSV = "csv"
    HTML = "html"

    @property
    def suffix(self) -> str:
        return f".{self.value}"


@dataclass
class ConversionResult:
    """Resultado de uma conversão bem-sucedida."""
    output_path: Path
    source_path: Path
    output_format: OutputFormat
    pages: List[int] = field(default_factory=list)
    tables_found: int = 0
    rows_written: int = 0
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Converte para dicionário serializável em JSON."""
        return {
            "output_path": str(self.output_path),
            "source_path": str(self.source_path),
            "output_format": self.output_format.value,
            "pages": list(self.pages),
            "tables_found": self.tables_found,
            "rows_written": self.rows_written,
            "warnings": list(self.warnings),
        }


@dataclass
class PDFInfo:
    """Metadados básicos de um PDF."""
    page_count: int
    title: str = ""
    encrypted: bool = False


@dataclass
class PageContent:
    """Conteúdo extraído de uma página de PDF."""
    number: int
    text: str = ""
    tables: List[List[List[str]]] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.text.strip() and not self.tables
