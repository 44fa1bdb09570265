"""
Conversor de Documentos.

Componente de referência do guia de componentes: converte PDFs em CSV ou
HTML e normaliza arquivos CSV.

Exemplo:
    from conversor import DocumentConverter

    result = DocumentConverter().pdf_to_html("edital.pdf", overwrite=True)
"""

__version__ = "1.1.0"

from .exceptions import (  # noqa: E402
    ConversionError,
    ConversorError,
    InputNotFoundError,
    OutputExistsError,
    ValidationError,
)
from .models import ConversionResult, OutputFormat  # noqa: E402
from .services.document_converter import DocumentConverter  # noqa: E402

__all__ = [
    "__version__",
    "DocumentConverter",
    "ConversionResult",
    "OutputFormat",
    "ConversorError",
    "ValidationError",
    "ConversionError",
    "InputNotFoundError",
    "OutputExistsError",
]
