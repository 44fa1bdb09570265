"""
Conversor de documentos: PDF -> CSV, PDF -> HTML e normalização de CSV.

Todas as operações seguem o mesmo formato:

- ``input_path`` posicional (str ou Path);
- ``output_path`` opcional (padrão: mesmo diretório, nova extensão);
- opções nomeadas (keyword-only);
- retorno ``ConversionResult`` com o caminho de saída resolvido.

Exemplo:
    from conversor import DocumentConverter

    converter = DocumentConverter()
    result = converter.pdf_to_csv("relatorio.pdf", delimiter=";", pages="1-3")
    print(result.output_path)
"""

import csv
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from ..config import (
    CSV_EXTENSIONS,
    PDF_EXTENSIONS,
    SUPPORTED_INPUT_EXTENSIONS,
    ConversionConfig,
    Messages,
    get_file_extension,
)
from ..exceptions import (
    InvalidOptionError,
    NoTablesFoundError,
    TextExtractionError,
    UnsupportedFileError,
)
from ..logging_config import get_context_logger
from ..models import ConversionResult, OutputFormat
from ..utils.deprecation import deprecated
from ..utils.file_helpers import PathLike, atomic_write, require_input_file, resolve_output_path
from ..utils.pages import PageSelection, resolve_pages
from .csv_normalizer import CSVNormalizer
from .html_renderer import render_document
from .pdf_extractor import PDFExtractor


def _check_delimiter(option: str, value: str) -> None:
    if not isinstance(value, str) or len(value) != 1:
        raise InvalidOptionError(option, "o delimitador deve ter exatamente um caractere")
    if value in ('"', "\r", "\n"):
        raise InvalidOptionError(option, f"delimitador {value!r} não é permitido")


def _check_extension(path: Path, allowed: Sequence[str]) -> None:
    extension = get_file_extension(path.name)
    if extension not in allowed:
        raise UnsupportedFileError(extension, allowed)


def merge_tables(
    tables: Sequence[Dict[str, Any]],
    include_page_column: bool = False,
    skip_repeated_headers: bool = True
) -> List[List[str]]:
    """
    Junta as tabelas extraídas em uma única grade retangular.

    Args:
        tables: Dicts {"page": int, "rows": [[...]]} na ordem do documento
        include_page_column: Se True, prefixa cada linha com o número da página
        skip_repeated_headers: Descarta a primeira linha de tabelas que repetem
            o cabeçalho da primeira tabela (tabela quebrada entre páginas)

    Returns:
        Linhas com a mesma quantidade de colunas
    """
    rows: List[List[str]] = []
    first_header: Optional[List[str]] = None

    for index, table in enumerate(tables):
        table_rows = [list(row) for row in table["rows"]]
        if index == 0:
            first_header = table_rows[0]
        elif skip_repeated_headers and table_rows[0] == first_header:
            table_rows = table_rows[1:]

        for row in table_rows:
            rows.append(([str(table["page"])] if include_page_column else []) + row)

    width = max((len(row) for row in rows), default=0)
    merged = [row + [""] * (width - len(row)) for row in rows]

    if include_page_column and merged:
        merged[0][0] = ConversionConfig.PAGE_COLUMN_NAME
    return merged


class DocumentConverter:
    """
    Converte PDFs em CSV/HTML e normaliza arquivos CSV.

    Args:
        encoding: Codificação dos arquivos CSV gerados (padrão: config)
        extractor: PDFExtractor a usar (injeção para testes)
        normalizer: CSVNormalizer a usar (injeção para testes)
    """

    def __init__(
        self,
        encoding: Optional[str] = None,
        extractor: Optional[PDFExtractor] = None,
        normalizer: Optional[CSVNormalizer] = None
    ):
        self.encoding = encoding or ConversionConfig.OUTPUT_ENCODING
        self.extractor = extractor or PDFExtractor()
        self.normalizer = normalizer or CSVNormalizer()

    # === PDF -> CSV ===

    def pdf_to_csv(
        self,
        input_path: PathLike,
        output_path: Optional[PathLike] = None,
        *,
        delimiter: str = ",",
        pages: PageSelection = None,
        overwrite: bool = False,
        include_page_column: bool = False,
        skip_repeated_headers: bool = True
    ) -> ConversionResult:
        """
        Extrai as tabelas de um PDF para um único CSV.

        Args:
            input_path: Caminho do PDF
            output_path: Caminho do CSV (padrão: mesmo nome com .csv)
            delimiter: Delimitador do CSV gerado
            pages: Páginas a processar ("1-3,5", 2, [1, 4]); None = todas
            overwrite: Se True, sobrescreve saída existente
            include_page_column: Se True, adiciona a coluna "pagina"
            skip_repeated_headers: Se True, remove cabeçalhos repetidos

        Returns:
            ConversionResult com caminho de saída e contagens

        Raises:
            InputNotFoundError: Se o PDF não existe
            OutputExistsError: Se a saída existe e overwrite=False
            InvalidPageSelectionError: Se a seleção de páginas for inválida
            NoTablesFoundError: Se nenhuma tabela for encontrada
            PDFError: Se o PDF não puder ser lido
        """
        source = require_input_file(input_path)
        _check_extension(source, PDF_EXTENSIONS)
        _check_delimiter("delimiter", delimiter)
        target = resolve_output_path(source, output_path, OutputFormat.CSV.suffix, overwrite)

        logger = get_context_logger(__name__, operacao="pdf_to_csv", arquivo=source.name)
        logger.info(f"{Messages.CONVERSION_STARTED}: {source} -> {target}")

        info = self.extractor.inspect(str(source))
        selected = resolve_pages(pages, info.page_count)
        tables = self.extractor.extract_tables(str(source), selected)
        if not tables:
            raise NoTablesFoundError(str(source))

        rows = merge_tables(tables, include_page_column, skip_repeated_headers)
        with atomic_write(target, encoding=self.encoding, newline="") as handle:
            writer = csv.writer(handle, delimiter=delimiter, lineterminator="\n")
            writer.writerows(rows)

        logger.info(f"{Messages.CONVERSION_DONE}: {len(tables)} tabelas, {len(rows)} linhas")
        return ConversionResult(
            output_path=target,
            source_path=source,
            output_format=OutputFormat.CSV,
            pages=selected,
            tables_found=len(tables),
            rows_written=len(rows),
        )

    @deprecated(since="1.1.0", removed_in="2.0.0", alternative="DocumentConverter.pdf_to_csv")
    def pdf_para_csv(self, input_path: PathLike, output_path: Optional[PathLike] = None, **options) -> ConversionResult:
        """Nome da API 1.0; delega para pdf_to_csv."""
        return self.pdf_to_csv(input_path, output_path, **options)

    # === PDF -> HTML ===

    def pdf_to_html(
        self,
        input_path: PathLike,
        output_path: Optional[PathLike] = None,
        *,
        pages: PageSelection = None,
        overwrite: bool = False,
        title: Optional[str] = None
    ) -> ConversionResult:
        """
        Converte texto e tabelas de um PDF em um documento HTML5 (UTF-8).

        Args:
            input_path: Caminho do PDF
            output_path: Caminho do HTML (padrão: mesmo nome com .html)
            pages: Páginas a processar; None = todas
            overwrite: Se True, sobrescreve saída existente
            title: Título do documento (padrão: metadado do PDF ou nome do arquivo)

        Returns:
            ConversionResult com caminho de saída e contagens

        Raises:
            InputNotFoundError: Se o PDF não existe
            OutputExistsError: Se a saída existe e overwrite=False
            TextExtractionError: Se as páginas não tiverem texto (PDF de imagem)
            PDFError: Se o PDF não puder ser lido
        """
        source = require_input_file(input_path)
        _check_extension(source, PDF_EXTENSIONS)
        target = resolve_output_path(source, output_path, OutputFormat.HTML.suffix, overwrite)

        logger = get_context_logger(__name__, operacao="pdf_to_html", arquivo=source.name)
        logger.info(f"{Messages.CONVERSION_STARTED}: {source} -> {target}")

        info = self.extractor.inspect(str(source))
        selected = resolve_pages(pages, info.page_count)
        contents = self.extractor.extract_pages(str(source), selected)
        if all(page.is_empty for page in contents):
            raise TextExtractionError(str(source))

        document_title = title or info.title or source.stem
        html = render_document(document_title, contents, lang=ConversionConfig.HTML_LANG)
        with atomic_write(target, encoding="utf-8") as handle:
            handle.write(html)

        warnings = [
            f"página {page.number} sem texto extraível" for page in contents if page.is_empty
        ]
        for warning in warnings:
            logger.warning(warning)

        tables_found = sum(len(page.tables) for page in contents)
        logger.info(f"{Messages.CONVERSION_DONE}: {len(contents)} paginas, {tables_found} tabelas")
        return ConversionResult(
            output_path=target,
            source_path=source,
            output_format=OutputFormat.HTML,
            pages=selected,
            tables_found=tables_found,
            rows_written=sum(len(table) for page in contents for table in page.tables),
            warnings=warnings,
        )

    # === CSV -> CSV normalizado ===

    def normalize_csv(
        self,
        input_path: PathLike,
        output_path: Optional[PathLike] = None,
        *,
        delimiter: Optional[str] = None,
        output_delimiter: str = ",",
        overwrite: bool = False,
        normalize_headers: bool = True,
        decimal_comma: bool = False
    ) -> ConversionResult:
        """
        Normaliza um CSV: codificação UTF-8, delimitador único, células limpas.

        Args:
            input_path: Caminho do CSV de entrada
            output_path: Caminho de saída (padrão: <nome>_normalizado.csv)
            delimiter: Delimitador de entrada; None para detectar
            output_delimiter: Delimitador do arquivo gerado
            overwrite: Se True, sobrescreve saída existente
            normalize_headers: Se True, converte cabeçalhos para snake_case
            decimal_comma: Se True, converte "1.234,56" em "1234.56"

        Returns:
            ConversionResult com linhas gravadas e avisos

        Raises:
            InputNotFoundError: Se o CSV não existe
            OutputExistsError: Se a saída existe e overwrite=False
            EncodingDetectionError: Se nenhuma codificação servir
            ConversionError: Se o CSV estiver vazio ou malformado
        """
        source = require_input_file(input_path)
        _check_extension(source, CSV_EXTENSIONS)
        if delimiter is not None:
            _check_delimiter("delimiter", delimiter)
        _check_delimiter("output_delimiter", output_delimiter)
        target = resolve_output_path(
            source, output_path, OutputFormat.CSV.suffix, overwrite,
            stem_suffix=ConversionConfig.NORMALIZED_SUFFIX
        )

        logger = get_context_logger(__name__, operacao="normalize_csv", arquivo=source.name)
        logger.info(f"{Messages.CONVERSION_STARTED}: {source} -> {target}")

        text, encoding = self.normalizer.read_text(source)
        effective_delimiter = delimiter or self.normalizer.detect_delimiter(text)
        rows = self.normalizer.parse(text, effective_delimiter)
        header, data, warnings = self.normalizer.normalize_rows(
            rows, normalize_headers=normalize_headers, decimal_comma=decimal_comma
        )

        with atomic_write(target, encoding=self.encoding, newline="") as handle:
            writer = csv.writer(handle, delimiter=output_delimiter, lineterminator="\n")
            writer.writerow(header)
            writer.writerows(data)

        logger.info(
            f"{Messages.CONVERSION_DONE}: {len(data)} linhas "
            f"(entrada {encoding}, delimitador {effective_delimiter!r})"
        )
        return ConversionResult(
            output_path=target,
            source_path=source,
            output_format=OutputFormat.CSV,
            rows_written=len(data) + 1,
            warnings=warnings,
        )

    # === Despacho ===

    def convert(
        self,
        input_path: PathLike,
        output_format: Any,
        output_path: Optional[PathLike] = None,
        **options
    ) -> ConversionResult:
        """
        Escolhe a operação pelo formato de saída e pela extensão de entrada.

        Args:
            input_path: Arquivo de entrada (.pdf, .csv ou .txt)
            output_format: OutputFormat ou texto "csv"/"html"
            output_path: Caminho de saída opcional
            **options: Repassadas para a operação escolhida

        Raises:
            UnsupportedFileError: Se a combinação entrada/saída não existir
        """
        source = require_input_file(input_path)
        try:
            fmt = OutputFormat(str(getattr(output_format, "value", output_format)).lower())
        except ValueError as e:
            raise UnsupportedFileError(f".{output_format}", [f.suffix for f in OutputFormat]) from e

        extension = get_file_extension(source.name)
        if extension not in SUPPORTED_INPUT_EXTENSIONS:
            raise UnsupportedFileError(extension, SUPPORTED_INPUT_EXTENSIONS)
        if extension in PDF_EXTENSIONS and fmt is OutputFormat.CSV:
            return self.pdf_to_csv(source, output_path, **options)
        if extension in PDF_EXTENSIONS and fmt is OutputFormat.HTML:
            return self.pdf_to_html(source, output_path, **options)
        if extension in CSV_EXTENSIONS and fmt is OutputFormat.CSV:
            return self.normalize_csv(source, output_path, **options)
        raise UnsupportedFileError(
            extension, [f"{ext} -> {fmt.suffix}" for ext in self._inputs_for(fmt)]
        )

    @staticmethod
    def _inputs_for(fmt: OutputFormat) -> List[str]:
        if fmt is OutputFormat.CSV:
            return PDF_EXTENSIONS + CSV_EXTENSIONS
        return list(PDF_EXTENSIONS)
