"""
Testes para services.document_converter.

Os testes de validação usam um extrator falso; os de ponta a ponta usam
PDFs gerados pelo PyMuPDF.
"""
import csv

import pytest

from conversor import DocumentConverter, services
from conversor.exceptions import (
    ConversionError,
    InputNotFoundError,
    InvalidOptionError,
    InvalidPageSelectionError,
    NoTablesFoundError,
    OutputExistsError,
    TextExtractionError,
    UnsupportedFileError,
    ValidationError,
)
from conversor.models import ConversionResult, OutputFormat, PageContent
from conversor.services.document_converter import merge_tables

TABELA = [
    ["Item", "Descricao", "Valor"],
    ["1", "Cimento", "10"],
    ["2", "Areia", "20"],
]


def _read_csv(path, delimiter=","):
    with open(path, encoding="utf-8", newline="") as handle:
        return list(csv.reader(handle, delimiter=delimiter))


class TestInputValidation:
    """Validações comuns a todas as operações."""

    @pytest.mark.parametrize("operacao", ["pdf_to_csv", "pdf_to_html", "normalize_csv"])
    def test_missing_input_raises_not_found(self, tmp_path, operacao):
        """Entrada inexistente gera erro de arquivo não encontrado."""
        converter = DocumentConverter()
        with pytest.raises(FileNotFoundError):
            getattr(converter, operacao)(tmp_path / "nao_existe.pdf")
        with pytest.raises(InputNotFoundError):
            getattr(converter, operacao)(tmp_path / "nao_existe.pdf")

    def test_existing_output_without_overwrite(self, fake_pdf, converter_factory):
        """Saída existente sem overwrite gera erro de validação."""
        fake_pdf.with_suffix(".csv").write_text("antigo")
        converter = converter_factory(tables=[{"page": 1, "rows": TABELA}])
        with pytest.raises(ValidationError):
            converter.pdf_to_csv(fake_pdf)
        with pytest.raises(OutputExistsError):
            converter.pdf_to_csv(fake_pdf)
        assert fake_pdf.with_suffix(".csv").read_text() == "antigo"

    def test_existing_output_with_overwrite(self, fake_pdf, converter_factory):
        fake_pdf.with_suffix(".csv").write_text("antigo")
        converter = converter_factory(tables=[{"page": 1, "rows": TABELA}])
        result = converter.pdf_to_csv(fake_pdf, overwrite=True)
        assert _read_csv(result.output_path) == TABELA

    def test_wrong_extension(self, sample_csv):
        with pytest.raises(UnsupportedFileError):
            DocumentConverter().pdf_to_csv(sample_csv("a,b\n"))

    @pytest.mark.parametrize("delimitador", ["", ";;", '"', "\n"])
    def test_invalid_delimiter(self, fake_pdf, converter_factory, delimitador):
        with pytest.raises(InvalidOptionError):
            converter_factory().pdf_to_csv(fake_pdf, delimiter=delimitador)

    def test_default_components(self):
        converter = DocumentConverter()
        assert isinstance(converter.extractor, services.PDFExtractor)
        assert isinstance(converter.normalizer, services.CSVNormalizer)
        assert "pdf_extractor" not in services.__all__
        assert "csv_normalizer" not in services.__all__

    def test_options_are_keyword_only(self, fake_pdf, converter_factory):
        with pytest.raises(TypeError):
            converter_factory().pdf_to_csv(fake_pdf, None, ";")


class TestPdfToCsv:
    """PDF -> CSV com extrator falso."""

    def test_default_output_and_result(self, fake_pdf, converter_factory):
        converter = converter_factory(page_count=2, tables=[{"page": 1, "rows": TABELA}])
        result = converter.pdf_to_csv(fake_pdf)

        assert isinstance(result, ConversionResult)
        assert result.output_path == fake_pdf.with_suffix(".csv").resolve()
        assert result.output_path.is_absolute()
        assert result.output_format is OutputFormat.CSV
        assert result.pages == [1, 2]
        assert result.tables_found == 1
        assert result.rows_written == 3

    def test_delimiter_and_custom_output(self, fake_pdf, converter_factory, tmp_path):
        converter = converter_factory(tables=[{"page": 1, "rows": TABELA}])
        destino = tmp_path / "saida" / "tabelas.csv"
        result = converter.pdf_to_csv(fake_pdf, destino, delimiter=";")
        assert result.output_path == destino.resolve()
        assert _read_csv(destino, ";") == TABELA

    def test_page_selection_is_validated(self, fake_pdf, converter_factory):
        converter = converter_factory(page_count=2, tables=[{"page": 1, "rows": TABELA}])
        with pytest.raises(InvalidPageSelectionError):
            converter.pdf_to_csv(fake_pdf, pages="3")

    def test_page_selection_filters_tables(self, fake_pdf, converter_factory):
        converter = converter_factory(
            page_count=3,
            tables=[{"page": 1, "rows": TABELA}, {"page": 3, "rows": [["x", "y"]]}],
        )
        result = converter.pdf_to_csv(fake_pdf, pages="2-3")
        assert result.pages == [2, 3]
        assert _read_csv(result.output_path) == [["x", "y"]]

    def test_no_tables(self, fake_pdf, converter_factory):
        with pytest.raises(NoTablesFoundError):
            converter_factory(tables=[]).pdf_to_csv(fake_pdf)
        assert not fake_pdf.with_suffix(".csv").exists()

    def test_deprecated_alias(self, fake_pdf, converter_factory):
        converter = converter_factory(tables=[{"page": 1, "rows": TABELA}])
        with pytest.warns(DeprecationWarning, match="pdf_to_csv"):
            result = converter.pdf_para_csv(fake_pdf, delimiter=";")
        assert _read_csv(result.output_path, ";") == TABELA


class TestMergeTables:

    def test_skips_repeated_header_and_pads(self):
        tables = [
            {"page": 1, "rows": [["A", "B"], ["1", "2"]]},
            {"page": 2, "rows": [["A", "B"], ["3", "4", "5"]]},
        ]
        assert merge_tables(tables) == [["A", "B", ""], ["1", "2", ""], ["3", "4", "5"]]

    def test_keeps_repeated_header_when_disabled(self):
        tables = [
            {"page": 1, "rows": [["A"], ["1"]]},
            {"page": 2, "rows": [["A"], ["2"]]},
        ]
        assert merge_tables(tables, skip_repeated_headers=False) == [["A"], ["1"], ["A"], ["2"]]

    def test_page_column(self):
        tables = [
            {"page": 1, "rows": [["A"], ["1"]]},
            {"page": 4, "rows": [["2"]]},
        ]
        assert merge_tables(tables, include_page_column=True) == [
            ["pagina", "A"], ["1", "1"], ["4", "2"]
        ]


class TestPdfToHtml:
    """PDF -> HTML com extrator falso."""

    def test_writes_document(self, fake_pdf, converter_factory):
        contents = [
            PageContent(number=1, text="Introducao", tables=[TABELA]),
            PageContent(number=2),
        ]
        converter = converter_factory(page_count=2, contents=contents, title="Titulo PDF")
        result = converter.pdf_to_html(fake_pdf)

        html = result.output_path.read_text(encoding="utf-8")
        assert result.output_path.suffix == ".html"
        assert result.output_format is OutputFormat.HTML
        assert "<title>Titulo PDF</title>" in html
        assert "<p>Introducao</p>" in html
        assert "<td>Cimento</td>" in html
        assert result.tables_found == 1
        assert result.rows_written == 3
        assert result.warnings == ["página 2 sem texto extraível"]

    def test_title_fallbacks(self, fake_pdf, converter_factory, tmp_path):
        contents = [PageContent(number=1, text="x")]
        converter = converter_factory(contents=contents)
        result = converter.pdf_to_html(fake_pdf)
        assert "<title>relatorio</title>" in result.output_path.read_text(encoding="utf-8")

        result = converter.pdf_to_html(fake_pdf, tmp_path / "outro.html", title="Meu titulo")
        assert "<title>Meu titulo</title>" in result.output_path.read_text(encoding="utf-8")

    def test_image_only_pdf(self, fake_pdf, converter_factory):
        converter = converter_factory(contents=[PageContent(number=1)])
        with pytest.raises(TextExtractionError):
            converter.pdf_to_html(fake_pdf)
        assert not fake_pdf.with_suffix(".html").exists()


class TestNormalizeCsv:
    """CSV -> CSV normalizado."""

    def test_normalizes_semicolon_cp1252(self, sample_csv):
        path = sample_csv(
            "Descrição;Preço Unitário;Qtd\n"
            "  Cimento  CP-II ;1.234,56;2\n"
            ";;\n"
            "Areia;12,50;\n",
            encoding="cp1252",
        )
        result = DocumentConverter().normalize_csv(path, decimal_comma=True)

        assert result.output_path.name == "planilha_normalizado.csv"
        assert _read_csv(result.output_path) == [
            ["descricao", "preco_unitario", "qtd"],
            ["Cimento CP-II", "1234.56", "2"],
            ["Areia", "12.50", ""],
        ]
        assert result.rows_written == 3
        assert result.pages == []

    def test_explicit_delimiters(self, sample_csv):
        path = sample_csv("a|b\n1|2\n")
        result = DocumentConverter().normalize_csv(path, delimiter="|", output_delimiter=";")
        assert result.output_path.read_text(encoding="utf-8") == "a;b\n1;2\n"

    def test_output_cannot_be_input(self, sample_csv):
        path = sample_csv("a,b\n")
        with pytest.raises(InvalidOptionError):
            DocumentConverter().normalize_csv(path, path, overwrite=True)

    def test_empty_file(self, sample_csv):
        with pytest.raises(ConversionError):
            DocumentConverter().normalize_csv(sample_csv("\n\n"))

    def test_warnings_for_long_rows(self, sample_csv):
        path = sample_csv("a,b\n1,2,3\n")
        result = DocumentConverter().normalize_csv(path)
        assert len(result.warnings) == 1

    def test_output_encoding_failure(self, sample_csv):
        """Célula que não cabe na codificação de saída gera ConversionError."""
        path = sample_csv("a,b\nPreço,2\n")
        with pytest.raises(ConversionError, match="Erro ao gravar"):
            DocumentConverter(encoding="ascii").normalize_csv(path)
        assert not path.with_name("planilha_normalizado.csv").exists()

    def test_output_parent_is_a_file(self, sample_csv, tmp_path):
        path = sample_csv("a,b\n1,2\n")
        bloqueio = tmp_path / "bloqueio"
        bloqueio.write_text("x")
        with pytest.raises(ConversionError):
            DocumentConverter().normalize_csv(path, bloqueio / "saida.csv")


class TestConvert:
    """Despacho por formato."""

    def test_dispatch(self, fake_pdf, converter_factory, sample_csv):
        converter = converter_factory(
            tables=[{"page": 1, "rows": TABELA}],
            contents=[PageContent(number=1, text="x")],
        )
        assert converter.convert(fake_pdf, "csv").output_path.suffix == ".csv"
        assert converter.convert(fake_pdf, OutputFormat.HTML).output_path.suffix == ".html"
        normalized = converter.convert(sample_csv("a;b\n1;2\n"), "CSV")
        assert normalized.output_path.name == "planilha_normalizado.csv"

    def test_unsupported_combinations(self, fake_pdf, sample_csv, converter_factory):
        converter = converter_factory()
        with pytest.raises(UnsupportedFileError):
            converter.convert(sample_csv("a\n"), "html")
        with pytest.raises(UnsupportedFileError) as exc_info:
            converter.convert(fake_pdf, "xlsx")
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_unknown_input_extension(self, tmp_path, converter_factory):
        path = tmp_path / "planilha.xlsx"
        path.write_bytes(b"PK")
        with pytest.raises(UnsupportedFileError, match=".xlsx"):
            converter_factory().convert(path, "csv")


class TestEndToEnd:
    """Conversões reais com PDFs gerados."""

    def test_pdf_to_csv(self, make_pdf):
        path = make_pdf([{"lines": ["Planilha"], "table": TABELA}], name="obra.pdf")
        result = DocumentConverter().pdf_to_csv(path, include_page_column=True)
        assert _read_csv(result.output_path) == [
            ["pagina"] + TABELA[0],
            ["1"] + TABELA[1],
            ["1"] + TABELA[2],
        ]

    def test_pdf_to_html(self, make_pdf):
        path = make_pdf([{"lines": ["Edital numero 12"], "table": TABELA}], title="Edital")
        result = DocumentConverter().pdf_to_html(path)
        html = result.output_path.read_text(encoding="utf-8")
        assert "<title>Edital</title>" in html
        assert "Edital numero 12" in html
        assert "<td>Areia</td>" in html

    def test_blank_pdf_to_html(self, make_pdf):
        with pytest.raises(TextExtractionError):
            DocumentConverter().pdf_to_html(make_pdf([{}]))
