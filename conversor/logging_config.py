"""
Configuração de logging do conversor.

Uso:
    from conversor.logging_config import get_logger
    logger = get_logger(__name__)
    logger.info("Mensagem de info")

O módulo não configura handlers na importação: quem usa o conversor como
biblioteca mantém o controle do logging. A CLI chama ``setup_logging()``.

Para logging estruturado (JSON):
    export LOG_FORMAT=json

Para associar todas as mensagens de uma execução:
    from conversor.logging_config import set_correlation_id
    set_correlation_id()

Para medir tempo de operações:
    from conversor.logging_config import log_timing
    with log_timing(logger, "extrair_tabelas"):
        ...
"""
import json
import logging
import os
import sys
import time
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from functools import wraps
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, TypeVar

# Context var para correlation ID (thread-safe)
_correlation_id: ContextVar[Optional[str]] = ContextVar('correlation_id', default=None)

T = TypeVar('T')

DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
CORRELATION_FORMAT = "%(asctime)s | %(levelname)-8s | [%(correlation_id)s] %(name)s | %(message)s"

_RESERVED_RECORD_KEYS = {
    'name', 'msg', 'args', 'created', 'filename', 'funcName', 'levelname',
    'levelno', 'lineno', 'module', 'msecs', 'pathname', 'process',
    'processName', 'relativeCreated', 'stack_info', 'exc_info', 'exc_text',
    'message', 'context', 'thread', 'threadName', 'taskName',
}


class StructuredFormatter(logging.Formatter):
    """
    Formatter que produz logs em formato JSON estruturado (uma linha por evento).
    """

    def format(self, record: logging.LogRecord) -> str:
        """Formata o registro de log como JSON."""
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        correlation_id = getattr(record, 'correlation_id', None) or _correlation_id.get()
        if correlation_id and correlation_id != '-':
            log_data['correlation_id'] = correlation_id

        if hasattr(record, 'context'):
            log_data['context'] = record.context

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        # Campos passados via extra=
        for key, value in record.__dict__.items():
            if key not in _RESERVED_RECORD_KEYS and key != 'correlation_id':
                if not key.startswith('_'):
                    log_data[key] = value

        return json.dumps(log_data, ensure_ascii=False, default=str)


class ContextLogger(logging.LoggerAdapter):
    """
    Logger adapter que adiciona contexto fixo a todas as mensagens.

    Uso:
        logger = get_context_logger(__name__, arquivo="relatorio.pdf")
        logger.info("Extraindo tabelas")
    """

    def process(self, msg, kwargs):
        """Adiciona contexto extra ao log."""
        extra = kwargs.get('extra', {})
        extra.update(self.extra)
        kwargs['extra'] = extra
        return msg, kwargs


class CorrelationFilter(logging.Filter):
    """Filter que adiciona correlation_id a todos os logs."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or '-'
        return True


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    format_string: Optional[str] = None,
    use_json: Optional[bool] = None
) -> None:
    """
    Configura o logging da aplicação (usado pela CLI).

    Args:
        level: Nível de logging (DEBUG, INFO, WARNING, ERROR)
        log_file: Caminho para arquivo de log (opcional)
        format_string: Formato das mensagens de log
        use_json: Se True, usa formato JSON estruturado

    Environment Variables:
        LOG_LEVEL: Nível de logging (default: WARNING)
        LOG_FILE: Caminho para arquivo de log
        LOG_FORMAT: "json" para formato JSON
    """
    effective_level: str = level or os.getenv("LOG_LEVEL", "WARNING") or "WARNING"
    log_level = getattr(logging, effective_level.upper(), logging.WARNING)

    if use_json is None:
        use_json = os.getenv("LOG_FORMAT", "").lower() == "json"

    effective_format: str = format_string or CORRELATION_FORMAT

    formatter: logging.Formatter
    if use_json:
        formatter = StructuredFormatter()
    else:
        formatter = logging.Formatter(effective_format)

    handlers: List[logging.Handler] = []

    # Logs vão para stderr; stdout fica reservado para a saída da CLI
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    log_file_path = log_file or os.getenv("LOG_FILE")
    if log_file_path:
        log_path = Path(log_file_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding='utf-8')
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    for handler in handlers:
        handler.addFilter(CorrelationFilter())

    logging.basicConfig(level=log_level, handlers=handlers, force=True)

    # Reduzir verbosidade de bibliotecas externas
    logging.getLogger("pdfminer").setLevel(logging.WARNING)
    logging.getLogger("pdfplumber").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Obtém um logger para um módulo.

    Args:
        name: Nome do módulo (geralmente __name__)

    Returns:
        Logger configurado
    """
    return logging.getLogger(name)


def get_context_logger(name: str, **context) -> ContextLogger:
    """
    Obtém um logger com contexto adicional.

    Args:
        name: Nome do módulo (geralmente __name__)
        **context: Contexto a incluir em todas as mensagens

    Returns:
        ContextLogger configurado

    Example:
        logger = get_context_logger(__name__, operacao="pdf_to_csv")
        logger.info("Iniciando")
    """
    base_logger = logging.getLogger(name)
    return ContextLogger(base_logger, context)


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context
) -> None:
    """
    Loga uma mensagem com contexto adicional em ``record.context``.

    Example:
        log_with_context(logger, logging.INFO, "Conversao concluida",
                         saida="/tmp/relatorio.csv", linhas=42)
    """
    logger.log(level, message, extra={'context': context})


# === Correlation ID ===

def set_correlation_id(correlation_id: Optional[str] = None) -> str:
    """
    Define o correlation ID da execução atual.

    Args:
        correlation_id: ID para usar (gera novo se None)

    Returns:
        O correlation ID definido
    """
    cid = correlation_id or str(uuid.uuid4())[:8]
    _correlation_id.set(cid)
    return cid


def get_correlation_id() -> Optional[str]:
    """Obtém o correlation ID da execução atual."""
    return _correlation_id.get()


def clear_correlation_id() -> None:
    """Limpa o correlation ID."""
    _correlation_id.set(None)


# === Timing Utilities ===

@contextmanager
def log_timing(
    logger: logging.Logger,
    operation: str,
    level: int = logging.DEBUG,
    threshold_ms: Optional[float] = None
):
    """
    Context manager para medir e logar tempo de operações.

    Args:
        logger: Logger a usar
        operation: Nome da operação
        level: Nível de log (default: DEBUG)
        threshold_ms: Se definido, só loga se tempo > threshold

    Example:
        with log_timing(logger, "extrair_tabelas"):
            extractor.extract_tables(path)
        # Output: [timing] extrair_tabelas completed in 123.45ms
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000
        if threshold_ms is None or elapsed_ms > threshold_ms:
            logger.log(
                level,
                f"[timing] {operation} completed in {elapsed_ms:.2f}ms"
            )


def timed(
    logger: Optional[logging.Logger] = None,
    operation: Optional[str] = None,
    level: int = logging.DEBUG,
    threshold_ms: Optional[float] = None
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """
    Decorator para medir tempo de execução de funções.

    Args:
        logger: Logger a usar (usa nome do módulo se None)
        operation: Nome da operação (usa nome da função se None)
        level: Nível de log
        threshold_ms: Só loga se tempo > threshold
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        func_logger = logger or logging.getLogger(func.__module__)
        op_name = operation or func.__name__

        @wraps(func)
        def wrapper(*args, **kwargs) -> T:
            with log_timing(func_logger, op_name, level, threshold_ms):
                return func(*args, **kwargs)
        return wrapper
    return decorator
