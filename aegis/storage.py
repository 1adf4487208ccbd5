# --------------------------------------------------------------
# File: storage.py
# Description: Utilidades de entrada/salida para confirmar archivos transformados.
# --------------------------------------------------------------
"""Lectura, escritura atómica sin sobrescritura y borrado de archivos."""

from __future__ import annotations

import os
import secrets

from aegis import config
from aegis.errors import DestinationExistsError

__all__ = ["read_file", "remove_file", "temporary_path", "write_new_file"]

FILE_MODE = 0o600


def read_file(path: str) -> bytes:
    """Lee el archivo completo en memoria."""

    with open(path, "rb") as handler:
        return handler.read()


def temporary_path(path: str) -> str:
    """Ruta del temporal hermano usado mientras se escribe ``path``."""

    directory, name = os.path.split(path)
    return os.path.join(directory, f".{name}.{secrets.token_hex(4)}{config.TEMP_SUFFIX}")


def write_new_file(path: str, data: bytes, mode: int = FILE_MODE) -> None:
    """Escribe ``data`` en ``path`` sin sobrescribir nunca un archivo existente.

    El contenido se vuelca primero en un temporal hermano y se enlaza en su
    destino solo cuando está completo. El enlace falla si el destino ya
    existe, de modo que dos escrituras concurrentes nunca se pisan.

    Args:
        path (str): Ruta de destino.
        data (bytes): Contenido a escribir.
        mode (int): Permisos del archivo creado.

    Raises:
        DestinationExistsError: Si ya existe un archivo en ``path``.
        OSError: Si falla la escritura.

    """

    if os.path.lexists(path):
        raise DestinationExistsError(f"el destino '{path}' ya existe")

    tmp_path = temporary_path(path)
    fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, mode)
    try:
        with os.fdopen(fd, "wb") as handler:
            handler.write(data)
            handler.flush()
            os.fsync(handler.fileno())
        try:
            os.link(tmp_path, path)
        except FileExistsError as exc:
            raise DestinationExistsError(f"el destino '{path}' ya existe") from exc
    finally:
        try:
            os.unlink(tmp_path)
        except FileNotFoundError:
            pass


def remove_file(path: str) -> None:
    """Elimina el archivo de origen una vez confirmada la salida."""

    os.remove(path)
