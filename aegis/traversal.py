# --------------------------------------------------------------
# File: traversal.py
# Description: Política de recorrido que decide qué entradas participan.
# --------------------------------------------------------------
"""Recorrido perezoso en profundidad de un árbol de directorios.

Cada entrada produce una tupla ``(ruta, TraversalDecision)``. Las exclusiones y
los enlaces simbólicos se resuelven antes de descender, de modo que nunca se
entrega un archivo situado bajo un directorio excluido.
"""

import os
from typing import AbstractSet, Iterator, List, Optional, Tuple

from aegis import config
from aegis.errors import TraversalError
from aegis.models import OperationKind, TraversalDecision

__all__ = ["classify_entry", "is_sealed_name", "walk"]


def is_sealed_name(name: str) -> bool:
    """Indica si el nombre lleva el sufijo de artefacto sellado."""

    return name.endswith(config.ARTIFACT_SUFFIX)


def classify_entry(
    entry: os.DirEntry, operation: OperationKind, excluded_dirs: AbstractSet[str]
) -> TraversalDecision:
    """Aplica las reglas de la política a una entrada de directorio.

    Args:
        entry (os.DirEntry): Entrada obtenida con ``os.scandir``.
        operation (OperationKind): Sellado o desellado.
        excluded_dirs (AbstractSet[str]): Nombres de directorio que no se recorren.

    Returns:
        TraversalDecision: Decisión para la entrada.

    """

    if entry.is_dir(follow_symlinks=False):
        if entry.name in excluded_dirs:
            return TraversalDecision.SKIP_EXCLUDED_DIR
        return TraversalDecision.DESCEND
    if entry.is_symlink():
        return TraversalDecision.SKIP_SYMLINK
    if not entry.is_file(follow_symlinks=False):
        return TraversalDecision.SKIP_SPECIAL
    if entry.name.endswith(config.TEMP_SUFFIX):
        return TraversalDecision.SKIP_TEMPORARY

    sealed = is_sealed_name(entry.name)
    if operation is OperationKind.SEAL:
        return TraversalDecision.SKIP_ALREADY_SEALED if sealed else TraversalDecision.INCLUDE
    return TraversalDecision.INCLUDE if sealed else TraversalDecision.SKIP_NOT_SEALED


def _list_dir(path: str) -> List[os.DirEntry]:
    # La lista se materializa antes de entregar entradas: lo escrito después no se revisita.
    try:
        with os.scandir(path) as entries:
            return sorted(entries, key=lambda entry: entry.name)
    except OSError as exc:
        raise TraversalError(f"no se puede leer el directorio '{path}': {exc}") from exc


def _walk_dir(
    path: str, operation: OperationKind, excluded_dirs: AbstractSet[str]
) -> Iterator[Tuple[str, TraversalDecision]]:
    for entry in _list_dir(path):
        try:
            decision = classify_entry(entry, operation, excluded_dirs)
        except OSError as exc:
            raise TraversalError(f"no se puede inspeccionar '{entry.path}': {exc}") from exc
        yield entry.path, decision
        if decision is TraversalDecision.DESCEND:
            yield from _walk_dir(entry.path, operation, excluded_dirs)


def walk(
    root: str,
    operation: OperationKind,
    excluded_dirs: Optional[AbstractSet[str]] = None,
) -> Iterator[Tuple[str, TraversalDecision]]:
    """Recorre ``root`` y produce la decisión de cada entrada.

    Si ``root`` es un enlace simbólico no se sigue: solo se produce ``SKIP_SYMLINK``.

    Args:
        root (str): Directorio raíz del recorrido.
        operation (OperationKind): Determina el filtro de sufijo aplicado.
        excluded_dirs (Optional[AbstractSet[str]]): Exclusiones; por defecto las
            de la configuración.

    Returns:
        Iterator[Tuple[str, TraversalDecision]]: Secuencia finita y no reiniciable.

    Raises:
        TraversalError: Si la raíz no existe, no es un directorio o no se puede leer.

    """

    if excluded_dirs is None:
        excluded_dirs = config.EXCLUDED_DIRS
    root = os.fspath(root)
    if os.path.islink(root):
        # La raíz tampoco se sigue si es un enlace simbólico.
        yield root, TraversalDecision.SKIP_SYMLINK
        return
    if not os.path.exists(root):
        raise TraversalError(f"el directorio '{root}' no existe")
    if not os.path.isdir(root):
        raise TraversalError(f"'{root}' no es un directorio")

    yield root, TraversalDecision.DESCEND
    yield from _walk_dir(root, operation, frozenset(excluded_dirs))
