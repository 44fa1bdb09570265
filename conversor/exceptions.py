"""
Exceções específicas do Conversor de Documentos.

Hierarquia em três níveis:

    ConversorError
    ├── ValidationError   (entrada inválida ou conflito de saída)
    └── ConversionError   (falha durante o processamento)

Falhas de baixo nível devem ser encapsuladas com contexto
(``raise ConversionError(...) from exc``), nunca descartadas.
"""

from typing import Iterable, Optional


class ConversorError(Exception):
    """Exceção base para todas as exceções do conversor."""

    def __init__(self, message: str, details: Optional[str] = None):
        self.message = message
        self.details = details
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


# === Exceções de Validação ===

class ValidationError(ConversorError):
    """Erro de validação de entrada, saída ou opções."""
    pass


class InputNotFoundError(ValidationError, FileNotFoundError):
    """Arquivo de entrada não existe."""

    def __init__(self, path: str):
        self.path = str(path)
        super().__init__(f"Arquivo de entrada não encontrado: {self.path}")


class OutputExistsError(ValidationError):
    """Arquivo de saída já existe e overwrite não foi habilitado."""

    def __init__(self, path: str):
        self.path = str(path)
        super().__init__(
            f"Arquivo de saída já existe: {self.path}. "
            "Use overwrite=True para sobrescrever."
        )


class UnsupportedFileError(ValidationError):
    """Formato de arquivo não suportado pela operação."""

    def __init__(self, extension: str, supported: Optional[Iterable[str]] = None):
        self.extension = extension
        supported_str = ", ".join(supported) if supported else ".pdf, .csv"
        super().__init__(
            f"Formato de arquivo '{extension or '(sem extensão)'}' não suportado. "
            f"Formatos aceitos: {supported_str}"
        )


class InvalidPageSelectionError(ValidationError):
    """Seleção de páginas malformada ou fora do intervalo do documento."""

    def __init__(self, selection: str, details: Optional[str] = None):
        self.selection = selection
        super().__init__(f"Seleção de páginas inválida: '{selection}'", details)


class InvalidOptionError(ValidationError):
    """Opção de conversão inválida."""

    def __init__(self, option: str, reason: str):
        self.option = option
        super().__init__(f"Opção '{option}' inválida: {reason}")


# === Exceções de Conversão ===

class ConversionError(ConversorError):
    """Erro durante a conversão de um documento."""
    pass


class PDFError(ConversionError):
    """Erro ao abrir ou ler arquivo PDF."""

    def __init__(self, operation: str, details: Optional[str] = None):
        super().__init__(f"Erro ao {operation} PDF", details)


class TextExtractionError(ConversionError):
    """PDF sem camada de texto (apenas imagem)."""

    def __init__(self, path: str):
        super().__init__(
            f"Não foi possível extrair texto de {path}: "
            "o PDF parece conter apenas imagens e OCR não é suportado"
        )


class NoTablesFoundError(ConversionError):
    """Nenhuma tabela encontrada nas páginas selecionadas."""

    def __init__(self, path: str):
        super().__init__(f"Nenhuma tabela encontrada em {path}")


class EncodingDetectionError(ConversionError):
    """Nenhuma codificação configurada conseguiu decodificar o arquivo."""

    def __init__(self, path: str, tried: Iterable[str]):
        self.tried = list(tried)
        super().__init__(
            f"Não foi possível decodificar {path}",
            f"codificações tentadas: {', '.join(self.tried)}"
        )
