"""
Configuracoes do conversor.

Este modulo re-exporta as configuracoes para imports curtos.

Exemplo:
    from conversor.config import ConversionConfig, Messages
"""

from .base import (
    CSV_EXTENSIONS,
    PDF_EXTENSIONS,
    SUPPORTED_INPUT_EXTENSIONS,
    env_bool,
    env_float,
    env_int,
    env_list,
    get_file_extension,
    is_allowed_extension,
)
from .conversion import ConversionConfig
from .messages import Messages
from .validators import (
    ValidationResult,
    get_config_summary,
    validate_conversion_config,
)

__all__ = [
    # Base
    "env_bool",
    "env_int",
    "env_float",
    "env_list",
    "PDF_EXTENSIONS",
    "CSV_EXTENSIONS",
    "SUPPORTED_INPUT_EXTENSIONS",
    "get_file_extension",
    "is_allowed_extension",
    # Conversao
    "ConversionConfig",
    # Mensagens
    "Messages",
    # Validacao
    "ValidationResult",
    "validate_conversion_config",
    "get_config_summary",
]
