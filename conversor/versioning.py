"""
Versionamento semântico (MAJOR.MINOR.PATCH).

- MAJOR: remoção ou mudança incompatível de comportamento público
- MINOR: funcionalidade nova compatível, ou depreciação
- PATCH: correção sem mudança de API

Um comportamento depreciado permanece disponível por pelo menos
uma versão MINOR antes de ser removido.
"""
import re
from typing import NamedTuple

_SEMVER_RE = re.compile(r'^v?(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)$')

BUMP_PARTS = ("major", "minor", "patch")


class SemVer(NamedTuple):
    """Versão semântica comparável (tuplas comparam campo a campo)."""
    major: int
    minor: int
    patch: int

    def bump(self, part: str) -> "SemVer":
        """
        Retorna a próxima versão incrementando a parte indicada.

        Args:
            part: "major", "minor" ou "patch"

        Raises:
            ValueError: Se a parte for desconhecida
        """
        if part == "major":
            return SemVer(self.major + 1, 0, 0)
        if part == "minor":
            return SemVer(self.major, self.minor + 1, 0)
        if part == "patch":
            return SemVer(self.major, self.minor, self.patch + 1)
        raise ValueError(f"Parte de versão inválida: '{part}'. Use uma de {BUMP_PARTS}")

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def parse_version(text: str) -> SemVer:
    """
    Converte texto "1.2.3" (ou tag "v1.2.3") em SemVer.

    Raises:
        ValueError: Se o texto não segue MAJOR.MINOR.PATCH
    """
    match = _SEMVER_RE.match(str(text).strip())
    if not match:
        raise ValueError(f"Versão semântica inválida: '{text}'")
    return SemVer(*(int(group) for group in match.groups()))


def satisfies_deprecation_window(since: str, removed_in: str) -> bool:
    """
    Verifica se a remoção respeita a janela mínima de depreciação.

    Args:
        since: Versão em que o comportamento foi depreciado
        removed_in: Versão prevista para a remoção

    Returns:
        True se removed_in está pelo menos uma MINOR depois de since
    """
    start = parse_version(since)
    end = parse_version(removed_in)
    return end >= start.bump("minor")
