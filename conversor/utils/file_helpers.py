"""
Utilitários para manipulação de arquivos.

Funções auxiliares para resolver caminhos de saída e gravar
arquivos de forma atômica.
"""
import os
import stat
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterator, Optional, Union

from ..exceptions import (
    ConversionError,
    ConversorError,
    InputNotFoundError,
    InvalidOptionError,
    OutputExistsError,
)
from ..logging_config import get_logger

logger = get_logger('conversor.utils.file_helpers')

PathLike = Union[str, "os.PathLike[str]"]


def cleanup_temp_file(temp_path: Optional[str]) -> bool:
    """
    Remove arquivo temporário com tratamento de erros detalhado.

    Args:
        temp_path: Caminho do arquivo temporário a remover

    Returns:
        True se removido ou não existia, False em caso de erro.
    """
    if not temp_path or not os.path.exists(temp_path):
        return True

    try:
        os.unlink(temp_path)
        logger.debug(f"Temp file removido: {temp_path}")
        return True
    except FileNotFoundError:
        logger.debug(f"Temp file ja removido: {temp_path}")
        return True
    except PermissionError as e:
        logger.warning(f"Sem permissao para remover temp file: {e}")
        return False
    except OSError as e:
        logger.error(f"Erro ao limpar temp file {temp_path}: {e}")
        return False


def require_input_file(input_path: PathLike) -> Path:
    """
    Garante que o arquivo de entrada existe.

    Raises:
        InputNotFoundError: Se o caminho não existe ou não é um arquivo
    """
    path = Path(input_path).expanduser()
    if not path.is_file():
        raise InputNotFoundError(str(path))
    return path.resolve()


def resolve_output_path(
    input_path: Path,
    output_path: Optional[PathLike],
    suffix: str,
    overwrite: bool = False,
    stem_suffix: str = ""
) -> Path:
    """
    Resolve e valida o caminho de saída de uma conversão.

    Args:
        input_path: Caminho (já resolvido) do arquivo de entrada
        output_path: Caminho pedido pelo usuário ou None para o padrão
        suffix: Extensão de saída padrão (ex: ".csv")
        overwrite: Se True, permite sobrescrever arquivo existente
        stem_suffix: Texto acrescentado ao nome padrão (ex: "_normalizado")

    Returns:
        Caminho absoluto de saída

    Raises:
        InvalidOptionError: Se a saída coincide com a entrada
        OutputExistsError: Se a saída existe e overwrite=False
    """
    if output_path is None:
        target = input_path.with_name(f"{input_path.stem}{stem_suffix}{suffix}")
    else:
        target = Path(output_path).expanduser()
    target = target.resolve()

    if target == input_path.resolve():
        raise InvalidOptionError("output_path", "a saída não pode sobrescrever a entrada")
    if target.is_dir():
        raise InvalidOptionError("output_path", f"{target} é um diretório")
    if target.exists() and not overwrite:
        raise OutputExistsError(str(target))
    return target


def _output_mode(target: Path) -> int:
    """Permissões do arquivo final: as do destino existente ou 0o666 menos a umask."""
    try:
        return stat.S_IMODE(target.stat().st_mode)
    except FileNotFoundError:
        pass
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


@contextmanager
def atomic_write(
    target: Path,
    encoding: str = "utf-8",
    newline: Optional[str] = None
) -> Iterator[IO[str]]:
    """
    Context manager que grava em arquivo temporário e o move para o destino.

    O arquivo de destino só aparece quando o bloco termina sem erro; em caso
    de exceção o temporário é removido. O arquivo final recebe as permissões
    do destino anterior ou, se novo, as padrão da umask.

    Args:
        target: Caminho final
        encoding: Codificação do texto
        newline: Repassado para open() (use "" para o módulo csv)

    Yields:
        Handle de texto aberto para escrita

    Raises:
        ConversionError: Se o diretório não puder ser criado, a gravação
            falhar ou o texto não couber na codificação
    """
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_path = tempfile.mkstemp(
            prefix=f".{target.name}.", suffix=".tmp", dir=str(target.parent)
        )
    except OSError as e:
        logger.error(f"Erro ao preparar gravacao de {target}: {e}", exc_info=True)
        raise ConversionError(f"Erro ao gravar {target}", str(e)) from e

    try:
        with os.fdopen(fd, "w", encoding=encoding, newline=newline) as handle:
            yield handle
        os.chmod(temp_path, _output_mode(target))
        os.replace(temp_path, target)
        logger.debug(f"Arquivo gravado: {target}")
    except ConversorError:
        cleanup_temp_file(temp_path)
        raise
    except (OSError, UnicodeError) as e:
        cleanup_temp_file(temp_path)
        logger.error(f"Erro ao gravar {target}: {e}", exc_info=True)
        raise ConversionError(f"Erro ao gravar {target}", str(e)) from e
    except BaseException:
        cleanup_temp_file(temp_path)
        raise
