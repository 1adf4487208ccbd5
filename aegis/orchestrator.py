# --------------------------------------------------------------
# File: orchestrator.py
# Description: Coordina el recorrido, el cifrado por archivo y el recuento final.
# --------------------------------------------------------------
"""Operaciones de alto nivel para sellar y desellar directorios completos.

Cada archivo se transforma de forma independiente: se escribe la salida y solo
después se elimina el origen. Un fallo entre ambos pasos deja los dos archivos
presentes, nunca ninguno. Los errores de un archivo se cuentan y la ejecución
continúa; solo un fallo del propio recorrido aborta.
"""

from __future__ import annotations

import logging
import os
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import AbstractSet, Iterable, Iterator, List, Optional, Tuple

from aegis import config, file_cipher
from aegis.crypto_kdf import PasswordLike, password_bytes
from aegis.errors import AegisError, MalformedArtifactError, TraversalError
from aegis.models import OperationKind, OperationOutcome, TraversalDecision
from aegis.storage import read_file, remove_file, write_new_file
from aegis.traversal import walk

__all__ = [
    "run_operation",
    "seal_directory",
    "sealed_output_path",
    "unseal_directory",
    "unsealed_output_path",
]

logger = logging.getLogger(__name__)

_SKIP_MESSAGES = {
    TraversalDecision.SKIP_EXCLUDED_DIR: "Directorio excluido: %s",
    TraversalDecision.SKIP_SYMLINK: "Enlace simbólico omitido: %s",
    TraversalDecision.SKIP_ALREADY_SEALED: "Ya sellado, se omite: %s",
    TraversalDecision.SKIP_NOT_SEALED: "Sin sufijo de artefacto, se omite: %s",
    TraversalDecision.SKIP_SPECIAL: "No es un archivo regular, se omite: %s",
    TraversalDecision.SKIP_TEMPORARY: "Temporal de escritura, se omite: %s",
}


class _Tally:
    """Acumulador de contadores compartido por los trabajadores de una ejecución."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.succeeded = 0
        self.failed = 0
        self.skipped = 0
        self.warnings = 0

    def add(self, counter: str, amount: int = 1) -> None:
        with self._lock:
            setattr(self, counter, getattr(self, counter) + amount)

    def to_outcome(
        self, operation: OperationKind, root: str, fatal_error: Optional[str]
    ) -> OperationOutcome:
        with self._lock:
            return OperationOutcome(
                operation=operation,
                root=root,
                succeeded=self.succeeded,
                failed=self.failed,
                skipped=self.skipped,
                warnings=self.warnings,
                fatal_error=fatal_error,
            )


def sealed_output_path(path: str) -> str:
    """Calcula ``dir/<nombre sin extensión><sufijo>`` para un archivo a sellar."""

    directory, name = os.path.split(path)
    stem, _ = os.path.splitext(name)
    return os.path.join(directory, stem + config.ARTIFACT_SUFFIX)


def unsealed_output_path(path: str, extension: bytes = b"") -> str:
    """Sustituye el sufijo de artefacto por la extensión recuperada.

    Raises:
        MalformedArtifactError: Si la extensión contiene separadores de ruta.

    """

    extension_text = os.fsdecode(extension)
    if os.sep in extension_text or (os.altsep and os.altsep in extension_text):
        raise MalformedArtifactError("la extensión recuperada contiene separadores de ruta")
    return path[: -len(config.ARTIFACT_SUFFIX)] + extension_text


def _transform(
    path: str, operation: OperationKind, secret: bytearray
) -> Tuple[str, bytes, bool]:
    """Lee y transforma un archivo; devuelve destino, datos y si es formato antiguo."""

    data = read_file(path)
    if operation is OperationKind.SEAL:
        extension = os.path.splitext(os.path.basename(path))[1]
        return sealed_output_path(path), file_cipher.seal(data, extension, secret), False

    envelope = file_cipher.unseal_envelope(data, secret)
    return unsealed_output_path(path, envelope.extension), envelope.content, envelope.legacy


def _process_file(
    path: str, operation: OperationKind, secret: bytearray, tally: _Tally
) -> None:
    try:
        output, data, legacy = _transform(path, operation, secret)
    except OSError as exc:
        logger.error("No se pudo leer '%s': %s. Se omite.", path, exc)
        tally.add("failed")
        return
    except AegisError as exc:
        logger.error("Fallo al procesar '%s': %s", path, exc)
        tally.add("failed")
        return

    try:
        write_new_file(output, data)
    except (AegisError, OSError) as exc:
        # El origen se conserva: sin salida confirmada no hay borrado.
        logger.error("No se pudo escribir '%s': %s", output, exc)
        tally.add("failed")
        return

    if legacy:
        logger.warning(
            "'%s' no contiene la extensión original; se restaura como '%s'",
            path,
            os.path.basename(output),
        )
        tally.add("warnings")

    try:
        remove_file(path)
    except OSError as exc:
        logger.warning("No se pudo eliminar el original '%s': %s", path, exc)
        tally.add("warnings")

    tally.add("succeeded")
    verb = "Sellado" if operation is OperationKind.SEAL else "Desellado"
    logger.info("%s '%s' -> '%s'", verb, path, os.path.basename(output))


def _eligible_files(
    entries: Iterable[Tuple[str, TraversalDecision]], tally: _Tally
) -> Iterator[str]:
    for path, decision in entries:
        if decision is TraversalDecision.INCLUDE:
            yield path
        elif decision.is_skip:
            tally.add("skipped")
            if decision is TraversalDecision.SKIP_SYMLINK:
                logger.warning(_SKIP_MESSAGES[decision], path)
            else:
                logger.debug(_SKIP_MESSAGES[decision], path)


def _run_sequential(
    files: Iterable[str], operation: OperationKind, secret: bytearray, tally: _Tally
) -> None:
    for path in files:
        _process_file(path, operation, secret, tally)


def _run_parallel(
    files: Iterable[str],
    operation: OperationKind,
    secret: bytearray,
    tally: _Tally,
    workers: int,
) -> None:
    # Limita el trabajo en vuelo para no adelantar el recorrido sin control.
    slots = threading.BoundedSemaphore(workers * 2)
    futures: List[Future] = []
    aborted: Optional[TraversalError] = None
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="aegis") as pool:
        try:
            for path in files:
                slots.acquire()
                future = pool.submit(_process_file, path, operation, secret, tally)
                future.add_done_callback(lambda _: slots.release())
                futures.append(future)
        except TraversalError as exc:
            # Cancela lo pendiente y espera a que terminen las escrituras en curso.
            pool.shutdown(wait=True, cancel_futures=True)
            aborted = exc
    # Los errores inesperados de los trabajadores se propagan también tras un aborto.
    for future in futures:
        if not future.cancelled():
            future.result()
    if aborted is not None:
        raise aborted


def _wipe(buffer: bytearray) -> None:
    for index in range(len(buffer)):
        buffer[index] = 0


def run_operation(
    root: str,
    password: PasswordLike,
    operation: OperationKind,
    *,
    excluded_dirs: Optional[AbstractSet[str]] = None,
    workers: Optional[int] = None,
) -> OperationOutcome:
    """Sella o desella todos los archivos elegibles bajo ``root``.

    Args:
        root (str): Directorio raíz.
        password (PasswordLike): Contraseña; se copia y se borra al terminar.
        operation (OperationKind): Operación a ejecutar.
        excluded_dirs (Optional[AbstractSet[str]]): Directorios que no se recorren.
        workers (Optional[int]): Número de hilos; ``1`` procesa en secuencia.

    Returns:
        OperationOutcome: Contadores finales y, si abortó, la causa.

    """

    root = os.fspath(root)
    workers = config.WORKERS if workers is None else max(1, workers)
    secret = bytearray(password_bytes(password))
    tally = _Tally()
    fatal_error = None

    try:
        files = _eligible_files(walk(root, operation, excluded_dirs), tally)
        if workers == 1:
            _run_sequential(files, operation, secret, tally)
        else:
            _run_parallel(files, operation, secret, tally, workers)
    except TraversalError as exc:
        fatal_error = str(exc)
        logger.critical("Error fatal durante %s: %s", operation.value, exc)
    finally:
        _wipe(secret)

    outcome = tally.to_outcome(operation, root, fatal_error)
    logger.debug("Resultado de %s: %s", operation.value, outcome.model_dump())
    return outcome


def seal_directory(root: str, password: PasswordLike, **options) -> OperationOutcome:
    """Sella cada archivo regular de ``root`` sustituyéndolo por su artefacto."""

    return run_operation(root, password, OperationKind.SEAL, **options)


def unseal_directory(root: str, password: PasswordLike, **options) -> OperationOutcome:
    """Restaura los archivos sellados de ``root`` con su extensión original."""

    return run_operation(root, password, OperationKind.UNSEAL, **options)
