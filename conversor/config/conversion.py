"""
Configuracoes de conversao de documentos.
"""
import os

from .base import env_float, env_int, env_list


class ConversionConfig:
    """Parametros padrao das conversoes (sobrescreviveis via ambiente)."""
    # Codificacao de saida
    OUTPUT_ENCODING = os.getenv("CONVERSOR_ENCODING", "utf-8")
    # Codificacoes tentadas, em ordem, ao ler CSV
    INPUT_ENCODINGS = env_list("CONVERSOR_INPUT_ENCODINGS", ["utf-8-sig", "cp1252", "latin-1"])
    # CSV
    CSV_DEFAULT_DELIMITER = os.getenv("CONVERSOR_CSV_DELIMITER", ",")
    CSV_CANDIDATE_DELIMITERS = ",;\t|"
    CSV_SNIFF_BYTES = env_int("CONVERSOR_CSV_SNIFF_BYTES", 64 * 1024)
    NORMALIZED_SUFFIX = os.getenv("CONVERSOR_NORMALIZED_SUFFIX", "_normalizado")
    EMPTY_HEADER_PREFIX = "coluna"
    PAGE_COLUMN_NAME = "pagina"
    # HTML
    HTML_LANG = os.getenv("CONVERSOR_HTML_LANG", "pt-BR")
    # Espaco vertical (em alturas de linha) que separa paragrafos
    PARAGRAPH_GAP_RATIO = env_float("CONVERSOR_PARAGRAPH_GAP_RATIO", 0.8)
