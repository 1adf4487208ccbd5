# --------------------------------------------------------------
# File: artifact.py
# Description: Serialización del formato en disco [salt][nonce][ciphertext].
# --------------------------------------------------------------
"""Codificación y decodificación de artefactos sellados sin prefijos de longitud."""

from aegis.errors import MalformedArtifactError
from aegis.models import NONCE_SIZE, SALT_SIZE, SealedArtifact

HEADER_SIZE = SALT_SIZE + NONCE_SIZE


def encode_artifact(salt: bytes, nonce: bytes, ciphertext: bytes) -> bytes:
    """Concatena salt, nonce y ciphertext en el orden del formato.

    Args:
        salt (bytes): Salt de 16 bytes.
        nonce (bytes): Nonce AES-GCM de 12 bytes.
        ciphertext (bytes): Ciphertext con etiqueta.

    Returns:
        bytes: Artefacto listo para escribir en disco.

    """

    artifact = SealedArtifact(salt=salt, nonce=nonce, payload=ciphertext)
    return artifact.salt + artifact.nonce + artifact.payload


def decode_artifact(data: bytes) -> SealedArtifact:
    """Separa un artefacto en sus tres regiones.

    Raises:
        MalformedArtifactError: Si no hay bytes suficientes para salt y nonce.

    """

    if len(data) < HEADER_SIZE:
        raise MalformedArtifactError(
            f"artefacto de {len(data)} bytes; se requieren al menos {HEADER_SIZE}"
        )
    return SealedArtifact(
        salt=data[:SALT_SIZE],
        nonce=data[SALT_SIZE:HEADER_SIZE],
        payload=data[HEADER_SIZE:],
    )
