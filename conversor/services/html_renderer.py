"""
Renderização de conteúdo de PDF como documento HTML5.
"""

from html import escape
from typing import List, Sequence

from ..models import PageContent

_STYLE = (
    "body{font-family:sans-serif;max-width:60rem;margin:2rem auto;line-height:1.4}"
    "section.pagina{border-bottom:1px solid #ccc;padding-bottom:1rem}"
    "table{border-collapse:collapse;margin:1rem 0}"
    "th,td{border:1px solid #999;padding:.25rem .5rem;text-align:left}"
)


def render_paragraphs(text: str) -> List[str]:
    """Converte texto com parágrafos separados por linha em branco em <p>."""
    blocks = [block.strip() for block in text.split("\n\n")]
    return [
        "<p>" + "<br>\n".join(escape(line) for line in block.splitlines()) + "</p>"
        for block in blocks if block
    ]


def render_table(rows: Sequence[Sequence[str]]) -> str:
    """
    Renderiza uma tabela; a primeira linha vira cabeçalho.

    Linhas mais curtas que a maior são completadas com células vazias.
    """
    if not rows:
        return ""
    width = max(len(row) for row in rows)

    def cells(row: Sequence[str], tag: str) -> str:
        padded = list(row) + [""] * (width - len(row))
        return "".join(f"<{tag}>{escape(cell)}</{tag}>" for cell in padded)

    parts = ["<table>", f"<thead><tr>{cells(rows[0], 'th')}</tr></thead>"]
    if len(rows) > 1:
        parts.append("<tbody>")
        parts.extend(f"<tr>{cells(row, 'td')}</tr>" for row in rows[1:])
        parts.append("</tbody>")
    parts.append("</table>")
    return "\n".join(parts)


def render_page(page: PageContent) -> str:
    """Renderiza uma página como <section>."""
    parts = [
        f'<section class="pagina" id="pagina-{page.number}">',
        f"<h2>Página {page.number}</h2>",
    ]
    parts.extend(render_paragraphs(page.text))
    parts.extend(render_table(table) for table in page.tables)
    parts.append("</section>")
    return "\n".join(parts)


def render_document(title: str, pages: Sequence[PageContent], lang: str = "pt-BR") -> str:
    """
    Monta o documento HTML completo.

    Args:
        title: Título do documento (escapado)
        pages: Conteúdo das páginas na ordem de saída
        lang: Idioma declarado em <html lang>

    Returns:
        HTML5 em uma string, terminado por quebra de linha
    """
    body = "\n".join(render_page(page) for page in pages)
    return (
        "<!DOCTYPE html>\n"
        f'<html lang="{escape(lang)}">\n'
        "<head>\n"
        '<meta charset="utf-8">\n'
        f"<title>{escape(title)}</title>\n"
        f"<style>{_STYLE}</style>\n"
        "</head>\n"
        "<body>\n"
        f"<h1>{escape(title)}</h1>\n"
        f"{body}\n"
        "</body>\n"
        "</html>\n"
    )
