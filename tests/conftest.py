"""
Fixtures compartilhadas para testes do conversor.

PDFs de teste são gerados com PyMuPDF a cada execução, sem arquivos binários
versionados.
"""
from pathlib import Path
from typing import Callable, List, Optional, Sequence

import fitz  # PyMuPDF
import pytest

from conversor.models import PageContent, PDFInfo
from conversor.services.document_converter import DocumentConverter


def draw_table(
    page: "fitz.Page",
    rows: Sequence[Sequence[str]],
    x0: float = 72,
    y0: float = 300,
    col_width: float = 120,
    row_height: float = 22
) -> None:
    """Desenha uma grade com bordas e escreve o texto de cada célula."""
    n_cols = max(len(row) for row in rows)
    width = n_cols * col_width
    height = len(rows) * row_height
    for i in range(len(rows) + 1):
        y = y0 + i * row_height
        page.draw_line((x0, y), (x0 + width, y))
    for j in range(n_cols + 1):
        x = x0 + j * col_width
        page.draw_line((x, y0), (x, y0 + height))
    for i, row in enumerate(rows):
        for j, cell in enumerate(row):
            page.insert_text(
                (x0 + j * col_width + 4, y0 + i * row_height + 15),
                cell,
                fontsize=10
            )


@pytest.fixture
def make_pdf(tmp_path) -> Callable[..., Path]:
    """
    Fábrica de PDFs.

    Cada página é um dict opcional com "lines" (texto corrido) e
    "table" (linhas da tabela desenhada abaixo do texto).
    """
    def _make(
        pages: Optional[List[dict]] = None,
        name: str = "documento.pdf",
        title: str = "",
        password: Optional[str] = None
    ) -> Path:
        doc = fitz.open()
        for spec in pages if pages is not None else [{"lines": ["Texto de exemplo"]}]:
            page = doc.new_page()
            y = 72
            for line in spec.get("lines", []):
                page.insert_text((72, y), line, fontsize=11)
                y += 16
            if spec.get("table"):
                draw_table(page, spec["table"])
        if title:
            doc.set_metadata({"title": title})

        path = tmp_path / name
        if password:
            doc.save(
                str(path),
                encryption=fitz.PDF_ENCRYPT_AES_256,
                owner_pw=password + "-owner",
                user_pw=password,
            )
        else:
            doc.save(str(path))
        doc.close()
        return path
    return _make


@pytest.fixture
def sample_csv(tmp_path) -> Callable[..., Path]:
    """Fábrica de arquivos CSV com conteúdo e codificação escolhidos."""
    def _make(content: str, name: str = "planilha.csv", encoding: str = "utf-8") -> Path:
        path = tmp_path / name
        path.write_bytes(content.encode(encoding))
        return path
    return _make


class FakeExtractor:
    """Extrator em memória para testar o conversor sem PDFs reais."""

    def __init__(
        self,
        page_count: int = 1,
        tables: Optional[List[dict]] = None,
        contents: Optional[List[PageContent]] = None,
        title: str = ""
    ):
        self.info = PDFInfo(page_count=page_count, title=title)
        self.tables = tables or []
        self.contents = contents or []
        self.calls: List[tuple] = []

    def inspect(self, file_path):
        self.calls.append(("inspect", file_path))
        return self.info

    def extract_tables(self, file_path, pages):
        self.calls.append(("extract_tables", list(pages)))
        return [t for t in self.tables if t["page"] in pages]

    def extract_pages(self, file_path, pages):
        self.calls.append(("extract_pages", list(pages)))
        return [c for c in self.contents if c.number in pages]


@pytest.fixture
def fake_pdf(tmp_path) -> Path:
    """Arquivo .pdf qualquer (o conteúdo é ignorado pelo FakeExtractor)."""
    path = tmp_path / "relatorio.pdf"
    path.write_bytes(b"%PDF-1.4\n%%EOF\n")
    return path


@pytest.fixture
def converter_factory() -> Callable[..., DocumentConverter]:
    """Cria DocumentConverter com FakeExtractor."""
    def _make(**kwargs) -> DocumentConverter:
        return DocumentConverter(extractor=FakeExtractor(**kwargs))
    return _make
