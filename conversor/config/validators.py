"""
Validadores de configuração do conversor.

Fornece funções para validar valores de configuração
e garantir que estão dentro de limites aceitáveis.
"""
import codecs
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..logging_config import get_logger

logger = get_logger('conversor.config.validators')


@dataclass
class ConfigValidationError:
    """Erro de validação de configuração."""
    config_name: str
    value: Any
    message: str
    severity: str = "error"  # "error" ou "warning"


@dataclass
class ValidationResult:
    """Resultado da validação de configurações."""
    is_valid: bool
    errors: List[ConfigValidationError] = field(default_factory=list)
    warnings: List[ConfigValidationError] = field(default_factory=list)

    def add_error(self, config_name: str, value: Any, message: str):
        """Adiciona um erro de validação."""
        self.errors.append(ConfigValidationError(
            config_name=config_name,
            value=value,
            message=message,
            severity="error"
        ))
        self.is_valid = False

    def add_warning(self, config_name: str, value: Any, message: str):
        """Adiciona um warning de validação."""
        self.warnings.append(ConfigValidationError(
            config_name=config_name,
            value=value,
            message=message,
            severity="warning"
        ))


def validate_positive(
    value: float,
    name: str,
    allow_zero: bool = False,
    result: Optional[ValidationResult] = None
) -> bool:
    """
    Valida se um valor é positivo.

    Args:
        value: Valor a validar
        name: Nome da configuração
        allow_zero: Se True, permite zero
        result: ValidationResult para adicionar erros

    Returns:
        True se válido, False caso contrário
    """
    if allow_zero and value < 0:
        if result:
            result.add_error(name, value, "Deve ser >= 0")
        return False

    if not allow_zero and value <= 0:
        if result:
            result.add_error(name, value, "Deve ser > 0")
        return False

    return True


def validate_encoding(
    value: str,
    name: str,
    result: Optional[ValidationResult] = None
) -> bool:
    """Valida se a codificação é conhecida pelo Python."""
    try:
        codecs.lookup(value)
    except LookupError:
        if result:
            result.add_error(name, value, "Codificação desconhecida")
        return False
    return True


def validate_delimiter(
    value: str,
    name: str,
    result: Optional[ValidationResult] = None
) -> bool:
    """Valida se o delimitador tem exatamente um caractere."""
    if not isinstance(value, str) or len(value) != 1:
        if result:
            result.add_error(name, value, "Deve ter exatamente um caractere")
        return False
    return True


def validate_conversion_config() -> ValidationResult:
    """
    Valida todas as configurações de conversão.

    Returns:
        ValidationResult com erros e warnings encontrados
    """
    from .conversion import ConversionConfig as CC

    result = ValidationResult(is_valid=True)

    validate_encoding(CC.OUTPUT_ENCODING, "CONVERSOR_ENCODING", result)
    for encoding in CC.INPUT_ENCODINGS:
        validate_encoding(encoding, "CONVERSOR_INPUT_ENCODINGS", result)
    validate_delimiter(CC.CSV_DEFAULT_DELIMITER, "CONVERSOR_CSV_DELIMITER", result)
    validate_positive(CC.CSV_SNIFF_BYTES, "CONVERSOR_CSV_SNIFF_BYTES", result=result)
    validate_positive(CC.PARAGRAPH_GAP_RATIO, "CONVERSOR_PARAGRAPH_GAP_RATIO", result=result)

    if not CC.NORMALIZED_SUFFIX:
        result.add_warning(
            "CONVERSOR_NORMALIZED_SUFFIX",
            CC.NORMALIZED_SUFFIX,
            "Sufixo vazio: a saída padrão coincide com a entrada"
        )

    if not result.is_valid:
        for error in result.errors:
            logger.error(f"[CONFIG] {error.config_name}={error.value}: {error.message}")

    for warning in result.warnings:
        logger.warning(f"[CONFIG] {warning.config_name}={warning.value}: {warning.message}")

    return result


def get_config_summary() -> Dict[str, Any]:
    """
    Retorna um resumo das configurações atuais.

    Returns:
        Dict com valores de configuração principais
    """
    from .conversion import ConversionConfig as CC

    return {
        "encoding": {
            "output": CC.OUTPUT_ENCODING,
            "input": list(CC.INPUT_ENCODINGS),
        },
        "csv": {
            "default_delimiter": CC.CSV_DEFAULT_DELIMITER,
            "sniff_bytes": CC.CSV_SNIFF_BYTES,
            "normalized_suffix": CC.NORMALIZED_SUFFIX,
        },
        "html": {
            "lang": CC.HTML_LANG,
        },
    }
