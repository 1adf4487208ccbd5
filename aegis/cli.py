# --------------------------------------------------------------
# File: cli.py
# Description: Interfaz de línea de comandos para sellar y desellar directorios.
# --------------------------------------------------------------
"""Punto de entrada ``aegis``: solicita la contraseña y muestra el resumen."""

import argparse
import getpass
import logging
import sys
from typing import List, Optional, Sequence

from aegis import __version__, config
from aegis.models import OperationKind, OperationOutcome
from aegis.orchestrator import run_operation
from aegis.password_policy import check_password_strength


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="aegis",
        description="Cifra y descifra directorios con una clave derivada de contraseña.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command", required=True)

    for kind, help_text in (
        (OperationKind.SEAL, "Sella (cifra) un directorio"),
        (OperationKind.UNSEAL, "Desella (descifra) los archivos .aegis de un directorio"),
    ):
        cmd = sub.add_parser(kind.value, help=help_text)
        cmd.add_argument("directory", help="Directorio a procesar")
        cmd.add_argument(
            "--exclude",
            action="append",
            metavar="NOMBRE",
            help="Directorio a excluir (repetible); sustituye la lista por defecto",
        )
        cmd.add_argument("--workers", type=int, default=None, help="Hilos de trabajo")
        cmd.add_argument("-v", "--verbose", action="store_true", help="Muestra detalle")
    return parser


def _read_password(operation: OperationKind) -> Optional[str]:
    password = getpass.getpass("Contraseña: ")
    if operation is not OperationKind.SEAL:
        return password

    if getpass.getpass("Repite la contraseña: ") != password:
        print("Las contraseñas no coinciden.", file=sys.stderr)
        return None

    ok, reasons, score = check_password_strength(password)
    if not ok:
        print(f"Contraseña débil (puntuación {score}/100):\n- " + "\n- ".join(reasons))
        if input("¿Continuar de todos modos? [s/N]: ").strip().lower() not in ("s", "si", "sí"):
            return None
    return password


def print_summary(outcome: OperationOutcome) -> None:
    verb = "sellados" if outcome.operation is OperationKind.SEAL else "desellados"
    if outcome.aborted:
        print(f"\nError fatal en '{outcome.root}': {outcome.fatal_error}", file=sys.stderr)
    else:
        print(f"\nOperación completada en '{outcome.root}'.")
    print(f"   Archivos {verb}: {outcome.succeeded}")
    if outcome.failed:
        print(f"   Fallidos: {outcome.failed}")
    if outcome.skipped:
        print(f"   Omitidos: {outcome.skipped}")
    if outcome.warnings:
        print(f"   Avisos: {outcome.warnings}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.LOG_LEVEL,
        format="%(levelname)s %(message)s",
    )
    operation = OperationKind(args.command)

    password = _read_password(operation)
    if password is None:
        return 1

    excluded: Optional[List[str]] = args.exclude
    outcome = run_operation(
        args.directory,
        password,
        operation,
        excluded_dirs=frozenset(excluded) if excluded is not None else None,
        workers=args.workers,
    )
    del password
    print_summary(outcome)
    return outcome.exit_code


if __name__ == "__main__":
    sys.exit(main())
