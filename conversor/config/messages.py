"""
Mensagens padronizadas do conversor.
"""


class Messages:
    """Mensagens de log e de saida da CLI."""
    CONVERSION_STARTED = "Iniciando conversao"
    CONVERSION_DONE = "Conversao concluida"
    CONVERSION_FAILED = "Falha na conversao"
    VALIDATION_FAILED = "Entrada invalida"
    ROW_TRUNCATED = "linha {line}: {extra} coluna(s) excedente(s) descartada(s)"
    DELIMITER_FALLBACK = "Delimitador nao detectado, usando padrao '{delimiter}'"
