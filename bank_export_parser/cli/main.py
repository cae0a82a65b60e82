"""
Punto de entrada CLI: bank-parser.

Uso:
    # Parsear una exportación e imprimir los movimientos
    bank-parser afirme /ruta/movimientos.csv

    # Elegir la revisión de formato y generar Excel
    bank-parser banorte /ruta/banorte.txt --revision operacion -o salida.xlsx

    # Generar JSON con los registros uniformes
    bank-parser hsbc /ruta/hsbc.xlsx -o salida.json

    # Ver bancos y revisiones disponibles
    bank-parser --list

Este módulo es el ÚNICO lugar donde se ensamblan los componentes:
- Crea las instancias concretas (lectores, ConsoleLogger, escritores).
- Pide el parser al registro con select_parser().
- Ejecuta el parseo y escribe la salida.

No contiene lógica de negocio: solo "fontanería" (wiring).
"""

import argparse
import sys
from pathlib import Path

from bank_export_parser.adapters.input.document_readers import default_readers
from bank_export_parser.adapters.output.loggers.console_logger import ConsoleLogger
from bank_export_parser.adapters.output.writers.excel_writer import ExcelWriter
from bank_export_parser.adapters.output.writers.json_writer import JsonWriter
from bank_export_parser.domain.exceptions import ExtractionError, OutputError, ParserBaseError
from bank_export_parser.domain.models.movimiento import Movimiento
from bank_export_parser.domain.ports.output_writer import OutputWriter
from bank_export_parser.domain.shared.money import format_money
from bank_export_parser.infrastructure.registry import create_default_registry, select_parser


def main(argv: list[str] | None = None) -> None:
    """Punto de entrada principal del CLI."""
    args = _parse_args(argv)
    registry = create_default_registry()

    if args.list:
        for banco in registry.available_banks:
            print(f"  {banco}: {', '.join(registry.revisions(banco))}")
        return

    if not args.bank or not args.input_path:
        print("❌ Se requieren BANCO y ARCHIVO (o --list).")
        sys.exit(1)

    input_path = Path(args.input_path)
    logger = ConsoleLogger(verbose=args.verbose)

    # --- Ensamblar componentes ---
    try:
        parser = select_parser(args.bank, args.revision, logger=logger, registry=registry)
    except ParserBaseError as e:
        print(f"❌ {e}")
        sys.exit(1)

    try:
        documento = _leer(input_path)
    except ExtractionError as e:
        logger.log_error(str(input_path), e)
        sys.exit(1)

    # --- Procesar ---
    print("=" * 60)
    print("BANK EXPORT PARSER")
    print("=" * 60)
    print(f"  Banco:    {parser.bank} ({parser.revision})")
    print(f"  Entrada:  {input_path}")
    print()

    movimientos = parser.parse(documento, source=str(input_path))

    if args.output:
        output_path = Path(args.output)
        try:
            creado = _writer_para(output_path).write(movimientos, output_path)
        except OutputError as e:
            logger.log_error(str(output_path), e)
            sys.exit(1)
        print(f"\n📁 Salida generada: {creado}")
    else:
        _imprimir(movimientos)

    # --- Resumen final ---
    logger.print_summary()


def _leer(input_path: Path) -> str | bytes:
    """Lee el archivo con el primer lector que lo acepte."""
    if not input_path.is_file():
        raise ExtractionError(str(input_path), "La ruta no existe o no es un archivo")

    for reader in default_readers():
        if reader.can_handle(input_path):
            return reader.read(input_path)

    # Extensión desconocida: se intenta como texto
    return default_readers()[-1].read(input_path)


def _writer_para(output_path: Path) -> OutputWriter:
    if output_path.suffix.lower() == ".json":
        return JsonWriter()
    return ExcelWriter()


def _imprimir(movimientos: list[Movimiento]) -> None:
    for mov in movimientos:
        print(f"  {mov.fecha}  {mov.tipo:<6}  {format_money(mov.monto):>16}  {mov.descripcion[:60]}")


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    """Parsea los argumentos de línea de comandos."""
    parser = argparse.ArgumentParser(
        prog="bank-parser",
        description="Parser de exportaciones de movimientos de bancos mexicanos",
        epilog="Ejemplo: bank-parser banorte /ruta/banorte.txt -o salida.xlsx",
    )

    parser.add_argument("bank", nargs="?", help="Clave del banco (afirme, banbajio, banorte, ...)")
    parser.add_argument("input_path", nargs="?", help="Ruta al archivo exportado")

    parser.add_argument(
        "-r",
        "--revision",
        help="Revisión de formato del banco. Si no se especifica, se usa la de por defecto.",
    )

    parser.add_argument(
        "-o",
        "--output",
        help="Archivo de salida (.xlsx o .json). Si no se especifica, se imprimen los movimientos.",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Mostrar cada línea descartada.",
    )

    parser.add_argument(
        "--list",
        action="store_true",
        help="Listar bancos y revisiones disponibles.",
    )

    return parser.parse_args(argv)


if __name__ == "__main__":
    main()
