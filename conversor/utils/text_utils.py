"""
Utilitários de normalização de texto.

Funções puras usadas na limpeza de células de tabelas e cabeçalhos de CSV.
"""

import re
import unicodedata
from functools import lru_cache
from typing import Optional

# Número no formato brasileiro: 1.234.567,89 | 1234,5 | -12,00 | 1.234
_BR_NUMBER_RE = re.compile(r'^[-+]?(\d{1,3}(\.\d{3})+|\d+)(,\d+)?$')
_NON_WORD_RE = re.compile(r'[^a-z0-9]+')
_WHITESPACE_RE = re.compile(r'\s+')


def strip_accents(text: str) -> str:
    """Remove acentos mantendo as letras base (ção -> cao)."""
    if not text:
        return ""
    nfkd = unicodedata.normalize('NFKD', text)
    return "".join(c for c in nfkd if not unicodedata.combining(c))


def collapse_whitespace(text: Optional[str]) -> str:
    """
    Colapsa espaços, tabs, quebras de linha e NBSP em um único espaço.

    Args:
        text: Texto a limpar (None vira string vazia)

    Returns:
        Texto sem espaços nas pontas e sem espaços repetidos
    """
    if not text:
        return ""
    return _WHITESPACE_RE.sub(' ', str(text).replace('\xa0', ' ')).strip()


@lru_cache(maxsize=1024)
def to_snake_case(text: str) -> str:
    """
    Converte um rótulo livre em identificador snake_case ASCII.

    Example:
        to_snake_case("Preço Unitário (R$)") -> "preco_unitario_r"
    """
    ascii_text = strip_accents(text).encode('ASCII', 'ignore').decode('ASCII')
    return _NON_WORD_RE.sub('_', ascii_text.lower()).strip('_')


def parse_brazilian_number(text: str) -> Optional[str]:
    """
    Converte número no formato brasileiro para notação com ponto decimal.

    Só converte quando a célula inteira é um número; caso contrário
    retorna None para que o chamador mantenha o valor original.

    Example:
        parse_brazilian_number("1.234,56") -> "1234.56"
        parse_brazilian_number("12 un") -> None
    """
    value = text.strip()
    if not value or not _BR_NUMBER_RE.match(value):
        return None
    # Pontos são sempre separadores de milhar: 1.500 -> 1500
    return value.replace('.', '').replace(',', '.')
