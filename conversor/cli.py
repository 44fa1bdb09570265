"""
Interface de linha de comando do conversor.

Uso:
    conversor --version
    conversor pdf-csv relatorio.pdf --paginas 1-3 --delimitador ";"
    conversor pdf-html edital.pdf -o saida/edital.html --overwrite
    conversor normalizar-csv planilha.csv --decimal-virgula

Códigos de saída:
    0  sucesso
    1  falha durante a conversão
    2  entrada inválida (inclui erros de uso do argparse)
"""

import argparse
import json
import sys
from typing import List, Optional

from . import __version__
from .config import Messages, get_config_summary, validate_conversion_config
from .exceptions import ConversionError, ValidationError
from .logging_config import get_logger, set_correlation_id, setup_logging
from .services.document_converter import DocumentConverter

logger = get_logger('conversor.cli')

EXIT_OK = 0
EXIT_CONVERSION_ERROR = 1
EXIT_VALIDATION_ERROR = 2


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('input', help='Arquivo de entrada')
    parser.add_argument(
        '-o', '--output',
        default=None,
        help='Arquivo de saída (padrão: ao lado da entrada)'
    )
    parser.add_argument(
        '--overwrite',
        action='store_true',
        help='Sobrescrever a saída se já existir'
    )


def build_parser() -> argparse.ArgumentParser:
    """Monta o parser de argumentos com os subcomandos."""
    parser = argparse.ArgumentParser(
        prog='conversor',
        description='Converte PDFs em CSV/HTML e normaliza arquivos CSV'
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )
    parser.add_argument(
        '--log-level',
        default=None,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Nível de log (padrão: LOG_LEVEL ou WARNING)'
    )
    parser.add_argument(
        '--json-logs',
        action='store_true',
        help='Emitir logs em JSON'
    )
    parser.add_argument(
        '--json',
        action='store_true',
        help='Imprimir o resultado completo em JSON'
    )

    subparsers = parser.add_subparsers(dest='command', metavar='comando')
    subparsers.required = True

    pdf_csv = subparsers.add_parser('pdf-csv', help='Extrai tabelas de um PDF para CSV')
    _add_common_arguments(pdf_csv)
    pdf_csv.add_argument('--paginas', default=None, help='Páginas, ex: "1-3,5"')
    pdf_csv.add_argument('--delimitador', default=',', help='Delimitador do CSV (padrão: ",")')
    pdf_csv.add_argument(
        '--coluna-pagina',
        action='store_true',
        help='Adicionar coluna com o número da página'
    )

    pdf_html = subparsers.add_parser('pdf-html', help='Converte um PDF em HTML')
    _add_common_arguments(pdf_html)
    pdf_html.add_argument('--paginas', default=None, help='Páginas, ex: "1-3,5"')
    pdf_html.add_argument('--titulo', default=None, help='Título do documento HTML')

    normalizar = subparsers.add_parser('normalizar-csv', help='Normaliza um arquivo CSV')
    _add_common_arguments(normalizar)
    normalizar.add_argument(
        '--delimitador',
        default=None,
        help='Delimitador de entrada (padrão: detectar)'
    )
    normalizar.add_argument(
        '--delimitador-saida',
        default=',',
        help='Delimitador de saída (padrão: ",")'
    )
    normalizar.add_argument(
        '--manter-cabecalho',
        action='store_true',
        help='Não converter cabeçalhos para snake_case'
    )
    normalizar.add_argument(
        '--decimal-virgula',
        action='store_true',
        help='Converter números "1.234,56" para "1234.56"'
    )
    return parser


def _run(args: argparse.Namespace, converter: DocumentConverter):
    if args.command == 'pdf-csv':
        return converter.pdf_to_csv(
            args.input,
            args.output,
            delimiter=args.delimitador,
            pages=args.paginas,
            overwrite=args.overwrite,
            include_page_column=args.coluna_pagina,
        )
    if args.command == 'pdf-html':
        return converter.pdf_to_html(
            args.input,
            args.output,
            pages=args.paginas,
            overwrite=args.overwrite,
            title=args.titulo,
        )
    return converter.normalize_csv(
        args.input,
        args.output,
        delimiter=args.delimitador,
        output_delimiter=args.delimitador_saida,
        overwrite=args.overwrite,
        normalize_headers=not args.manter_cabecalho,
        decimal_comma=args.decimal_virgula,
    )


def main(argv: Optional[List[str]] = None, converter: Optional[DocumentConverter] = None) -> int:
    """
    Ponto de entrada da CLI.

    Args:
        argv: Argumentos (padrão: sys.argv[1:])
        converter: Instância a usar (injeção para testes)

    Returns:
        Código de saída do processo
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(level=args.log_level, use_json=True if args.json_logs else None)
    set_correlation_id()

    config_check = validate_conversion_config()
    if not config_check.is_valid:
        for error in config_check.errors:
            print(
                f"erro de configuração: {error.config_name}={error.value!r}: {error.message}",
                file=sys.stderr
            )
        return EXIT_VALIDATION_ERROR
    logger.debug(f"Configuracao: {get_config_summary()}")

    try:
        result = _run(args, converter or DocumentConverter())
    except ValidationError as e:
        logger.debug(f"{Messages.VALIDATION_FAILED}: {e}", exc_info=True)
        print(f"erro: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR
    except ConversionError as e:
        logger.error(f"{Messages.CONVERSION_FAILED}: {e}", exc_info=True)
        print(f"erro: {e}", file=sys.stderr)
        return EXIT_CONVERSION_ERROR

    if args.json:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        print(result.output_path)
        for warning in result.warnings:
            print(f"aviso: {warning}", file=sys.stderr)
    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
