# --------------------------------------------------------------
# File: file_cipher.py
# Description: Sellado y desellado del contenido de un único archivo.
# --------------------------------------------------------------
"""Cifrado por archivo con la extensión original protegida dentro del sobre.

El sobre en claro es ``extension || 0x00 || contenido``. Al ir dentro del
ciphertext autenticado, la extensión recuperada también está protegida frente
a manipulaciones.
"""

import os
import warnings
from typing import Tuple, Union

from aegis.artifact import decode_artifact, encode_artifact
from aegis.crypto_kdf import PasswordLike, derive_key
from aegis.crypto_sym import aes_gcm_decrypt_with_key, aes_gcm_encrypt_with_key
from aegis.errors import LegacyFormatWarning
from aegis.models import SALT_SIZE, PlaintextEnvelope

SEPARATOR = b"\x00"


def _extension_bytes(extension: Union[str, bytes]) -> bytes:
    if isinstance(extension, str):
        return os.fsencode(extension)
    return bytes(extension)


def build_envelope(content: bytes, extension: Union[str, bytes] = b"") -> bytes:
    """Antepone la extensión y el separador NUL al contenido del archivo."""

    envelope = PlaintextEnvelope(extension=_extension_bytes(extension), content=content)
    return envelope.extension + SEPARATOR + envelope.content


def split_envelope(envelope: bytes) -> PlaintextEnvelope:
    """Separa extensión y contenido usando el primer byte NUL.

    Si no hay separador se asume un artefacto antiguo: todo el sobre es
    contenido y la extensión queda vacía.
    """

    index = envelope.find(SEPARATOR)
    if index == -1:
        return PlaintextEnvelope(content=envelope, legacy=True)
    return PlaintextEnvelope(extension=envelope[:index], content=envelope[index + 1 :])


def seal(plaintext: bytes, extension: Union[str, bytes], password: PasswordLike) -> bytes:
    """Cifra el contenido de un archivo y devuelve el artefacto serializado.

    Args:
        plaintext (bytes): Contenido original del archivo.
        extension (Union[str, bytes]): Extensión original, p. ej. ``".txt"``.
        password (PasswordLike): Contraseña del usuario.

    Returns:
        bytes: Artefacto ``salt || nonce || ciphertext``.

    """

    # Salt y nonce nuevos en cada llamada: nunca se reutilizan.
    salt = os.urandom(SALT_SIZE)
    key = derive_key(password, salt)
    nonce, ciphertext = aes_gcm_encrypt_with_key(key, build_envelope(plaintext, extension))
    return encode_artifact(salt, nonce, ciphertext)


def unseal_envelope(artifact: bytes, password: PasswordLike) -> PlaintextEnvelope:
    """Descifra un artefacto y devuelve el sobre con extensión y contenido.

    Raises:
        MalformedArtifactError: Si el artefacto es demasiado corto.
        AuthenticationFailedError: Si la contraseña es incorrecta o hay daños.

    """

    sealed = decode_artifact(artifact)
    key = derive_key(password, sealed.salt)
    return split_envelope(aes_gcm_decrypt_with_key(key, sealed.nonce, sealed.payload))


def unseal(artifact: bytes, password: PasswordLike) -> Tuple[bytes, bytes]:
    """Versión en tupla de :func:`unseal_envelope`.

    Emite :class:`LegacyFormatWarning` cuando el artefacto no incluye la
    extensión original.

    Returns:
        Tuple[bytes, bytes]: Contenido en claro y extensión original.

    """

    envelope = unseal_envelope(artifact, password)
    if envelope.legacy:
        warnings.warn(
            "el artefacto no contiene la extensión original", LegacyFormatWarning, stacklevel=2
        )
    return envelope.content, envelope.extension
