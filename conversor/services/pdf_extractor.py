"""
Serviço de extração de texto e tabelas de PDFs.
Utiliza PyMuPDF para inspecionar o documento e pdfplumber para o conteúdo.
"""

from typing import Any, Dict, List, Optional, Sequence

import fitz  # PyMuPDF
import pdfplumber

from ..config import ConversionConfig
from ..exceptions import PDFError
from ..logging_config import get_logger, log_timing
from ..models import PageContent, PDFInfo
from ..utils.text_utils import collapse_whitespace

logger = get_logger('conversor.services.pdf_extractor')

Table = List[List[str]]


def clean_table(raw_table: Sequence[Sequence[Any]]) -> Table:
    """
    Limpa uma tabela extraída pelo pdfplumber.

    Células None viram "", quebras de linha internas viram espaço
    e linhas totalmente vazias são descartadas.
    """
    cleaned_table: Table = []
    for row in raw_table or []:
        cleaned_row = [collapse_whitespace(cell) if cell else "" for cell in row]
        if any(cell for cell in cleaned_row):
            cleaned_table.append(cleaned_row)
    return cleaned_table


def group_paragraphs(lines: Sequence[Dict[str, Any]], gap_ratio: float) -> str:
    """
    Agrupa linhas de texto em parágrafos pela distância vertical.

    Args:
        lines: Linhas no formato de ``Page.extract_text_lines()``
        gap_ratio: Espaço (em alturas de linha) que inicia novo parágrafo

    Returns:
        Texto com linhas separadas por "\\n" e parágrafos por "\\n\\n"
    """
    paragraphs: List[List[str]] = []
    previous_bottom: Optional[float] = None

    for line in lines:
        text = collapse_whitespace(line.get("text"))
        if not text:
            continue
        top = float(line.get("top", 0))
        bottom = float(line.get("bottom", top))
        height = max(bottom - top, 1.0)
        if previous_bottom is None or top - previous_bottom > height * gap_ratio:
            paragraphs.append([])
        paragraphs[-1].append(text)
        previous_bottom = bottom

    return "\n\n".join("\n".join(paragraph) for paragraph in paragraphs)


class PDFExtractor:
    """Extrai metadados, texto e tabelas de arquivos PDF."""

    def __init__(self, paragraph_gap_ratio: Optional[float] = None):
        if paragraph_gap_ratio is None:
            paragraph_gap_ratio = ConversionConfig.PARAGRAPH_GAP_RATIO
        self.paragraph_gap_ratio = paragraph_gap_ratio

    def inspect(self, file_path: str) -> PDFInfo:
        """
        Lê metadados básicos do PDF.

        Args:
            file_path: Caminho para o arquivo PDF

        Returns:
            PDFInfo com total de páginas, título e flag de criptografia

        Raises:
            PDFError: Se o arquivo não puder ser aberto ou exigir senha
        """
        try:
            doc = fitz.open(file_path)
        except Exception as e:
            logger.error(f"Erro PDF: {e}", exc_info=True)
            raise PDFError("abrir", str(e)) from e

        try:
            if not doc.is_pdf:
                raise PDFError("abrir", "arquivo não é um PDF")
            if doc.needs_pass:
                raise PDFError("abrir", "PDF protegido por senha")
            metadata = doc.metadata or {}
            info = PDFInfo(
                page_count=doc.page_count,
                title=(metadata.get("title") or "").strip(),
                encrypted=bool(doc.is_encrypted),
            )
        finally:
            doc.close()

        logger.debug(f"PDF inspecionado: {file_path} ({info.page_count} paginas)")
        return info

    def extract_tables(self, file_path: str, pages: Sequence[int]) -> List[Dict[str, Any]]:
        """
        Extrai as tabelas das páginas indicadas.

        Args:
            file_path: Caminho para o arquivo PDF
            pages: Páginas 1-based a processar

        Returns:
            Lista de dicts {"page": int, "rows": Table}, na ordem do documento
        """
        all_tables: List[Dict[str, Any]] = []
        logger.info(f"Extraindo tabelas de: {file_path}")

        try:
            with log_timing(logger, "extract_tables"), pdfplumber.open(file_path) as pdf:
                for page_number in pages:
                    page = pdf.pages[page_number - 1]
                    for raw_table in page.extract_tables():
                        rows = clean_table(raw_table)
                        if rows:
                            all_tables.append({"page": page_number, "rows": rows})
        except Exception as e:
            logger.error(f"Erro PDF: {e}", exc_info=True)
            raise PDFError("extrair tabelas do", str(e)) from e

        logger.info(f"Tabelas extraidas: {len(all_tables)} tabelas encontradas")
        return all_tables

    def extract_pages(self, file_path: str, pages: Sequence[int]) -> List[PageContent]:
        """
        Extrai texto corrido e tabelas de cada página.

        O texto das regiões ocupadas por tabelas é removido do texto corrido
        para não aparecer duplicado.

        Args:
            file_path: Caminho para o arquivo PDF
            pages: Páginas 1-based a processar

        Returns:
            Lista de PageContent na ordem das páginas
        """
        contents: List[PageContent] = []
        logger.info(f"Extraindo paginas de: {file_path}")

        try:
            with log_timing(logger, "extract_pages"), pdfplumber.open(file_path) as pdf:
                for page_number in pages:
                    page = pdf.pages[page_number - 1]
                    found = page.find_tables()
                    tables = [rows for rows in (clean_table(t.extract()) for t in found) if rows]

                    text_area = page
                    for table in found:
                        text_area = text_area.outside_bbox(table.bbox)
                    text = group_paragraphs(
                        text_area.extract_text_lines(),
                        self.paragraph_gap_ratio
                    )
                    contents.append(PageContent(number=page_number, text=text, tables=tables))
        except Exception as e:
            logger.error(f"Erro PDF: {e}", exc_info=True)
            raise PDFError("extrair conteúdo do", str(e)) from e

        logger.info(f"Paginas extraidas: {len(contents)}")
        return contents
