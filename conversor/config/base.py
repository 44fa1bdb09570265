"""
Configuracoes base do conversor.
Helpers de ambiente e extensoes de arquivo.
"""
import os
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()


# === Helpers para leitura de variaveis de ambiente ===
def env_bool(key: str, default: bool = False) -> bool:
    """Le variavel de ambiente como booleano."""
    val = os.getenv(key, "").lower()
    if val in ("1", "true", "yes", "on"):
        return True
    if val in ("0", "false", "no", "off"):
        return False
    return default


def env_int(key: str, default: int = 0) -> int:
    """Le variavel de ambiente como inteiro."""
    val = os.getenv(key)
    if val is None:
        return default
    try:
        return int(val)
    except ValueError:
        return default


def env_float(key: str, default: float = 0.0) -> float:
    """Le variavel de ambiente como float."""
    val = os.getenv(key)
    if val is None:
        return default
    try:
        return float(val)
    except ValueError:
        return default


def env_list(key: str, default: List[str]) -> List[str]:
    """Le variavel de ambiente como lista separada por virgula."""
    val = os.getenv(key, "")
    items = [item.strip() for item in val.split(",") if item.strip()]
    return items or list(default)


# === Extensoes de Arquivo Aceitas ===
PDF_EXTENSIONS = [".pdf"]
CSV_EXTENSIONS = [".csv", ".txt"]
SUPPORTED_INPUT_EXTENSIONS = PDF_EXTENSIONS + CSV_EXTENSIONS


def get_file_extension(filename: Optional[str]) -> str:
    """Retorna a extensao do arquivo em minusculas (com ponto)."""
    if not filename:
        return ""
    return os.path.splitext(str(filename))[1].lower()


def is_allowed_extension(filename: str, allowed: Optional[List[str]] = None) -> bool:
    """Verifica se a extensao do arquivo esta na lista permitida."""
    if allowed is None:
        allowed = SUPPORTED_INPUT_EXTENSIONS
    return get_file_extension(filename) in allowed
