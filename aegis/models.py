# --------------------------------------------------------------
# File: models.py
# Description: Modelos de datos comunes utilizados por el motor de sellado.
# --------------------------------------------------------------
"""Modelos Pydantic que encapsulan artefactos, sobres y resultados de ejecución."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, field_validator

SALT_SIZE = 16
NONCE_SIZE = 12


class OperationKind(str, Enum):
    """Sentido de la transformación aplicada a un directorio."""

    SEAL = "seal"
    UNSEAL = "unseal"


class TraversalDecision(str, Enum):
    """Resultado de la política de recorrido para una entrada del árbol."""

    DESCEND = "descend"
    SKIP_EXCLUDED_DIR = "skip_excluded_dir"
    SKIP_SYMLINK = "skip_symlink"
    SKIP_ALREADY_SEALED = "skip_already_sealed"
    SKIP_NOT_SEALED = "skip_not_sealed"
    SKIP_SPECIAL = "skip_special"
    SKIP_TEMPORARY = "skip_temporary"
    INCLUDE = "include"

    @property
    def is_skip(self) -> bool:
        return self not in (TraversalDecision.DESCEND, TraversalDecision.INCLUDE)


class SealedArtifact(BaseModel):
    """Representa un archivo sellado tal y como se guarda en disco.

    Attributes:
        salt (bytes): Salt aleatoria de 16 bytes usada en la derivación.
        nonce (bytes): Nonce AES-GCM de 12 bytes.
        payload (bytes): Ciphertext con la etiqueta de autenticación al final.

    """

    salt: bytes
    nonce: bytes
    payload: bytes

    @field_validator("salt")
    @classmethod
    def _check_salt(cls, value: bytes) -> bytes:
        if len(value) != SALT_SIZE:
            raise ValueError(f"la salt debe medir {SALT_SIZE} bytes")
        return value

    @field_validator("nonce")
    @classmethod
    def _check_nonce(cls, value: bytes) -> bytes:
        if len(value) != NONCE_SIZE:
            raise ValueError(f"el nonce debe medir {NONCE_SIZE} bytes")
        return value


class PlaintextEnvelope(BaseModel):
    """Contenido lógico de un archivo antes de cifrar o tras descifrar.

    Attributes:
        extension (bytes): Extensión original del archivo, posiblemente vacía.
        content (bytes): Bytes del archivo en claro.
        legacy (bool): ``True`` si el sobre no contenía separador de extensión.

    """

    extension: bytes = b""
    content: bytes
    legacy: bool = False

    @field_validator("extension")
    @classmethod
    def _check_extension(cls, value: bytes) -> bytes:
        if b"\x00" in value:
            raise ValueError("la extensión no puede contener bytes NUL")
        return value


class OperationOutcome(BaseModel):
    """Contadores finales de una ejecución de sellado o desellado.

    Attributes:
        operation (OperationKind): Operación ejecutada.
        root (str): Directorio raíz recorrido.
        succeeded (int): Archivos transformados correctamente.
        failed (int): Archivos que no pudieron transformarse.
        skipped (int): Entradas omitidas por la política de recorrido.
        warnings (int): Archivos transformados con alguna advertencia.
        fatal_error (Optional[str]): Causa del aborto, si lo hubo.

    """

    operation: OperationKind
    root: str
    succeeded: int = 0
    failed: int = 0
    skipped: int = 0
    warnings: int = 0
    fatal_error: Optional[str] = None

    @property
    def aborted(self) -> bool:
        return self.fatal_error is not None

    @property
    def exit_code(self) -> int:
        return 1 if self.aborted else 0
