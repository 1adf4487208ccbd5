# --------------------------------------------------------------
# File: crypto_kdf.py
# Description: Derivación de claves simétricas a partir de contraseñas con scrypt.
# --------------------------------------------------------------
"""Funciones de derivación de claves para sellar archivos con contraseña.

Los parámetros de coste no se guardan en el artefacto: cambiarlos invalida
todos los archivos sellados anteriormente.
"""

from typing import Union

from cryptography.hazmat.primitives.kdf.scrypt import Scrypt

from aegis.errors import KeyDerivationError
from aegis.models import SALT_SIZE

KEY_SIZE = 32
SCRYPT_N = 2**15  # ~32 MiB con r=8
SCRYPT_R = 8
SCRYPT_P = 1

PasswordLike = Union[str, bytes, bytearray, memoryview]


def password_bytes(password: PasswordLike) -> bytes:
    """Normaliza la contraseña a bytes, codificando en UTF-8 si es texto."""

    if isinstance(password, str):
        return password.encode("utf-8")
    return bytes(password)


def derive_key(password: PasswordLike, salt: bytes) -> bytes:
    """Deriva la clave AES-256 de un archivo usando scrypt.

    Args:
        password (PasswordLike): Contraseña introducida por el usuario.
        salt (bytes): Salt aleatoria de 16 bytes propia del archivo.

    Returns:
        bytes: Clave simétrica de 32 bytes.

    Raises:
        KeyDerivationError: Si scrypt agota la memoria disponible.

    """

    if len(salt) != SALT_SIZE:
        raise ValueError(f"la salt debe medir {SALT_SIZE} bytes")

    kdf = Scrypt(salt=salt, length=KEY_SIZE, n=SCRYPT_N, r=SCRYPT_R, p=SCRYPT_P)
    try:
        return kdf.derive(password_bytes(password))
    except MemoryError as exc:
        raise KeyDerivationError("memoria insuficiente para derivar la clave") from exc
