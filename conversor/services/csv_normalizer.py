"""
Normalização de arquivos CSV.

Detecta codificação e delimitador, limpa células e padroniza cabeçalhos
para snake_case ASCII.
"""

import csv
import io
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

from ..config import ConversionConfig, Messages
from ..exceptions import ConversionError, EncodingDetectionError
from ..logging_config import get_logger
from ..utils.text_utils import collapse_whitespace, parse_brazilian_number, to_snake_case

logger = get_logger('conversor.services.csv_normalizer')

NumberedRow = Tuple[int, List[str]]


class CSVNormalizer:
    """Lê e normaliza o conteúdo de arquivos CSV."""

    def __init__(
        self,
        encodings: Optional[Sequence[str]] = None,
        candidate_delimiters: Optional[str] = None,
        default_delimiter: Optional[str] = None,
        sniff_bytes: Optional[int] = None
    ):
        self.encodings = list(encodings or ConversionConfig.INPUT_ENCODINGS)
        self.candidate_delimiters = candidate_delimiters or ConversionConfig.CSV_CANDIDATE_DELIMITERS
        self.default_delimiter = default_delimiter or ConversionConfig.CSV_DEFAULT_DELIMITER
        self.sniff_bytes = sniff_bytes or ConversionConfig.CSV_SNIFF_BYTES

    def read_text(self, file_path: Path) -> Tuple[str, str]:
        """
        Lê o arquivo tentando as codificações configuradas, em ordem.

        Args:
            file_path: Caminho do CSV

        Returns:
            Tupla (texto, codificação usada)

        Raises:
            EncodingDetectionError: Se nenhuma codificação servir
            ConversionError: Se o arquivo não puder ser lido
        """
        try:
            raw = Path(file_path).read_bytes()
        except OSError as e:
            logger.error(f"Erro ao ler {file_path}: {e}", exc_info=True)
            raise ConversionError(f"Erro ao ler {file_path}", str(e)) from e

        for encoding in self.encodings:
            try:
                text = raw.decode(encoding)
            except (UnicodeDecodeError, LookupError):
                logger.debug(f"Codificacao {encoding} falhou para {file_path}")
                continue
            logger.debug(f"Codificacao detectada: {encoding}")
            return text, encoding

        raise EncodingDetectionError(str(file_path), self.encodings)

    def detect_delimiter(self, text: str) -> str:
        """
        Detecta o delimitador usando csv.Sniffer sobre uma amostra.

        Returns:
            Delimitador detectado ou o padrão configurado
        """
        sample = text[:self.sniff_bytes]
        if len(text) > self.sniff_bytes and "\n" in sample:
            sample = sample[:sample.rfind("\n")]

        try:
            dialect = csv.Sniffer().sniff(sample, delimiters=self.candidate_delimiters)
        except csv.Error:
            logger.info(Messages.DELIMITER_FALLBACK.format(delimiter=self.default_delimiter))
            return self.default_delimiter
        logger.debug(f"Delimitador detectado: {dialect.delimiter!r}")
        return dialect.delimiter

    def parse(self, text: str, delimiter: str) -> List[NumberedRow]:
        """
        Lê as linhas do CSV preservando o número da linha de origem.

        Raises:
            ConversionError: Se o módulo csv rejeitar o conteúdo
        """
        reader = csv.reader(io.StringIO(text, newline=""), delimiter=delimiter)
        rows: List[NumberedRow] = []
        try:
            for row in reader:
                rows.append((reader.line_num, row))
        except csv.Error as e:
            raise ConversionError(f"CSV malformado na linha {reader.line_num}", str(e)) from e
        return rows

    @staticmethod
    def normalize_cell(value: Optional[str], decimal_comma: bool = False) -> str:
        """
        Limpa uma célula.

        Args:
            value: Conteúdo original
            decimal_comma: Se True, converte números no formato brasileiro

        Returns:
            Célula sem espaços extras (e com ponto decimal, se pedido)
        """
        cell = collapse_whitespace(value)
        if decimal_comma and cell:
            converted = parse_brazilian_number(cell)
            if converted is not None:
                return converted
        return cell

    @staticmethod
    def normalize_header(header: Sequence[str]) -> List[str]:
        """
        Padroniza nomes de colunas.

        Acentos removidos, snake_case, vazios viram ``coluna_N`` e
        duplicados recebem sufixo ``_2``, ``_3``...

        Example:
            normalize_header(["Preço", "", "preco"]) -> ["preco", "coluna_2", "preco_2"]
        """
        normalized: List[str] = []
        used = set()
        for index, name in enumerate(header, start=1):
            base = to_snake_case(collapse_whitespace(name))
            if not base:
                base = f"{ConversionConfig.EMPTY_HEADER_PREFIX}_{index}"
            candidate = base
            suffix = 2
            while candidate in used:
                candidate = f"{base}_{suffix}"
                suffix += 1
            used.add(candidate)
            normalized.append(candidate)
        return normalized

    def normalize_rows(
        self,
        rows: Iterable[NumberedRow],
        normalize_headers: bool = True,
        decimal_comma: bool = False
    ) -> Tuple[List[str], List[List[str]], List[str]]:
        """
        Normaliza cabeçalho e linhas de dados.

        A primeira linha não vazia é o cabeçalho. Linhas vazias são
        descartadas, linhas curtas completadas e linhas longas truncadas
        com um aviso por linha.

        Returns:
            Tupla (cabeçalho, linhas, avisos)

        Raises:
            ConversionError: Se não houver cabeçalho
        """
        header: Optional[List[str]] = None
        data: List[List[str]] = []
        warnings: List[str] = []

        for line_number, raw_row in rows:
            if header is None:
                cells = [collapse_whitespace(cell) for cell in raw_row]
                if not any(cells):
                    continue
                header = self.normalize_header(cells) if normalize_headers else cells
                continue

            row = [self.normalize_cell(cell, decimal_comma) for cell in raw_row]
            if not any(row):
                continue

            width = len(header)
            if len(row) > width:
                extra = len(row) - width
                warning = Messages.ROW_TRUNCATED.format(line=line_number, extra=extra)
                logger.warning(warning)
                warnings.append(warning)
                row = row[:width]
            elif len(row) < width:
                row = row + [""] * (width - len(row))
            data.append(row)

        if header is None:
            raise ConversionError("CSV sem cabeçalho: nenhuma linha com conteúdo")
        return header, data, warnings
