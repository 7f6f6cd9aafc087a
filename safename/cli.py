"""Command line interface to normalize names or rename directory entries."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional, Sequence

from colorama import just_fix_windows_console

from safename.config.naming_config import NamingConfiguration
from safename.controllers.naming_controller import NamingController
from safename.services.naming_service import NamingConfigError, NamingService
from safename.views.tree_view import render_tree


logger = logging.getLogger(__name__)


def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse the command line arguments."""

    parser = argparse.ArgumentParser(
        prog="safename",
        description=(
            "Normaliza nombres de archivo para que sean válidos en cualquier sistema. "
            "Sin nombres como argumento, revisa las entradas del directorio actual."
        ),
    )
    parser.add_argument("names", nargs="*", help="Nombres a normalizar e imprimir.")
    parser.add_argument(
        "-n",
        "--name",
        action="store_true",
        help="Aplica solo los cambios mínimos (name) en lugar de clean.",
    )
    parser.add_argument(
        "-r",
        "--recursive",
        action="store_true",
        help="Recorre también los subdirectorios.",
    )
    parser.add_argument(
        "-c",
        "--change",
        action="store_true",
        help="Renombra los archivos en disco en lugar de solo mostrar los cambios.",
    )
    parser.add_argument(
        "--root",
        default=os.curdir,
        help="Directorio a revisar (por defecto el directorio actual).",
    )
    parser.add_argument(
        "--replacement",
        default=None,
        help="Texto que reemplaza los caracteres inválidos (por defecto SAFENAME_REPLACEMENT o vacío).",
    )
    parser.add_argument(
        "--max-length",
        dest="max_length",
        type=int,
        default=None,
        help="Longitud máxima en bytes (por defecto SAFENAME_MAX_LENGTH o 240).",
    )
    parser.add_argument("--no-color", action="store_true", help="Desactiva los colores.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Muestra mensajes de depuración.")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point for the command line interface."""

    arguments = parse_arguments(argv)
    logging.basicConfig(
        level=logging.DEBUG if arguments.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    options = NamingConfiguration().build_options(arguments.replacement, arguments.max_length)
    try:
        service = NamingService.from_options(options)
    except NamingConfigError as exc:
        print(f"safename: {exc}", file=sys.stderr)
        return 2

    controller = NamingController(service, use_clean=not arguments.name)
    if arguments.names:
        for value in arguments.names:
            print(controller.normalize(value))
        return 0

    root = os.path.abspath(arguments.root)
    if not os.path.isdir(root):
        print(f"safename: '{arguments.root}' no es un directorio accesible", file=sys.stderr)
        return 2
    results = controller.rename_directory(root, arguments.recursive, arguments.change)
    color = not arguments.no_color and sys.stdout.isatty()
    if color:
        just_fix_windows_console()
    sys.stdout.write(render_tree(root, results, color))

    failures: List[str] = [result.oldPath for result in results if result.error]
    if failures:
        logger.debug("Entradas sin renombrar: %s", failures)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
