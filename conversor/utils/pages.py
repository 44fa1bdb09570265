"""
Seleção de páginas de PDF.

Páginas são sempre numeradas a partir de 1, como o usuário as vê no leitor.
"""

from typing import Iterable, List, Optional, Sequence, Union

from ..exceptions import InvalidPageSelectionError

PageSelection = Union[str, int, Sequence[int], None]


def parse_page_selection(selection: str) -> List[int]:
    """
    Converte uma seleção textual de páginas em lista ordenada.

    Args:
        selection: Texto como "1-3,5" ou "2"

    Returns:
        Lista ordenada e sem repetições de páginas (1-based)

    Raises:
        InvalidPageSelectionError: Se o texto for malformado

    Example:
        parse_page_selection("5,1-3,3") -> [1, 2, 3, 5]
    """
    if selection is None or not str(selection).strip():
        raise InvalidPageSelectionError(str(selection), "seleção vazia")

    pages = set()
    for part in str(selection).split(","):
        part = part.strip()
        if not part:
            raise InvalidPageSelectionError(selection, "intervalo vazio")
        if "-" in part:
            start_str, _, end_str = part.partition("-")
            try:
                start, end = int(start_str), int(end_str)
            except ValueError as e:
                raise InvalidPageSelectionError(selection, f"intervalo '{part}' não numérico") from e
            if start > end:
                raise InvalidPageSelectionError(selection, f"intervalo '{part}' invertido")
            pages.update(range(start, end + 1))
        else:
            try:
                pages.add(int(part))
            except ValueError as e:
                raise InvalidPageSelectionError(selection, f"página '{part}' não numérica") from e

    if any(page < 1 for page in pages):
        raise InvalidPageSelectionError(selection, "páginas começam em 1")
    return sorted(pages)


def _normalize(selection: PageSelection) -> Optional[List[int]]:
    if selection is None:
        return None
    if isinstance(selection, str):
        return parse_page_selection(selection)
    if isinstance(selection, bool):
        raise InvalidPageSelectionError(repr(selection), "tipo inválido")
    if isinstance(selection, int):
        return [selection]
    pages: Iterable[int] = selection
    try:
        return sorted({int(page) for page in pages})
    except (TypeError, ValueError):
        raise InvalidPageSelectionError(repr(selection), "páginas devem ser inteiros")


def resolve_pages(selection: PageSelection, page_count: int) -> List[int]:
    """
    Valida a seleção contra o total de páginas do documento.

    Args:
        selection: None (todas), texto "1-3,5", inteiro ou sequência de inteiros
        page_count: Total de páginas do PDF

    Returns:
        Lista ordenada de páginas 1-based a processar

    Raises:
        InvalidPageSelectionError: Se alguma página estiver fora de 1..page_count
    """
    pages = _normalize(selection)
    if pages is None:
        return list(range(1, page_count + 1))
    if not pages:
        raise InvalidPageSelectionError(repr(selection), "nenhuma página selecionada")

    out_of_range = [page for page in pages if page < 1 or page > page_count]
    if out_of_range:
        raise InvalidPageSelectionError(
            repr(selection) if not isinstance(selection, str) else selection,
            f"páginas fora do intervalo 1-{page_count}: "
            f"{', '.join(str(p) for p in out_of_range)}"
        )
    return pages
