"""
Depreciação de APIs públicas.

Uso:
    @deprecated(since="1.1.0", removed_in="2.0.0", alternative="pdf_to_csv")
    def pdf_para_csv(...):
        ...
"""
import warnings
from functools import wraps
from typing import Any, Callable, Optional, TypeVar

from ..versioning import satisfies_deprecation_window

F = TypeVar('F', bound=Callable[..., Any])


def deprecated(
    since: str,
    removed_in: str,
    alternative: Optional[str] = None
) -> Callable[[F], F]:
    """
    Marca uma função como depreciada e emite DeprecationWarning a cada chamada.

    Args:
        since: Versão em que a depreciação foi anunciada
        removed_in: Versão em que a função será removida
        alternative: Nome da API que substitui a depreciada

    Raises:
        ValueError: Na decoração, se a janela for menor que uma versão MINOR
    """
    if not satisfies_deprecation_window(since, removed_in):
        raise ValueError(
            f"Janela de depreciação insuficiente: {since} -> {removed_in} "
            "(mínimo de uma versão MINOR)"
        )

    def decorator(func: F) -> F:
        message = (
            f"{func.__qualname__} está depreciado desde a versão {since} "
            f"e será removido na versão {removed_in}."
        )
        if alternative:
            message += f" Use {alternative}."

        @wraps(func)
        def wrapper(*args, **kwargs):
            warnings.warn(message, DeprecationWarning, stacklevel=2)
            return func(*args, **kwargs)

        wrapper.__deprecated__ = message  # type: ignore[attr-defined]
        return wrapper  # type: ignore[return-value]
    return decorator
