# --------------------------------------------------------------
# File: crypto_sym.py
# Description: Primitivas AES-GCM para cifrado y descifrado simétrico seguro.
# --------------------------------------------------------------
"""Rutinas de cifrado autenticado para proteger el contenido de los archivos."""

import os
from typing import Optional, Tuple

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from aegis.errors import AuthenticationFailedError
from aegis.models import NONCE_SIZE

TAG_SIZE = 16


def aes_gcm_encrypt_with_key(
    key: bytes, plaintext: bytes, aad: Optional[bytes] = None
) -> Tuple[bytes, bytes]:
    """Cifra datos con AES-GCM utilizando una clave proporcionada.

    Args:
        key (bytes): Clave simétrica de 256 bits.
        plaintext (bytes): Datos a cifrar.
        aad (Optional[bytes]): Datos autenticados adicionales.

    Returns:
        Tuple[bytes, bytes]: Nonce aleatorio y ciphertext con la etiqueta al final.

    """

    nonce = os.urandom(NONCE_SIZE)
    aes = AESGCM(key)
    return nonce, aes.encrypt(nonce, plaintext, aad)


def aes_gcm_decrypt_with_key(
    key: bytes, nonce: bytes, ciphertext: bytes, aad: Optional[bytes] = None
) -> bytes:
    """Descifra datos con AES-GCM verificando la etiqueta de autenticación.

    Args:
        key (bytes): Clave simétrica que protege los datos.
        nonce (bytes): Vector de inicialización de 96 bits.
        ciphertext (bytes): Datos cifrados con la etiqueta de 128 bits al final.
        aad (Optional[bytes]): Datos autenticados adicionales.

    Returns:
        bytes: Mensaje original en claro.

    Raises:
        AuthenticationFailedError: Si la etiqueta no es válida.

    """

    aes = AESGCM(key)
    try:
        return aes.decrypt(nonce, ciphertext, aad)
    except InvalidTag as exc:
        raise AuthenticationFailedError(
            "contraseña incorrecta o archivo dañado"
        ) from exc
