# --------------------------------------------------------------
# File: test_crypto_sym.py
# Description: Pruebas del cifrado y descifrado simétrico con AES-GCM.
# --------------------------------------------------------------

import os

import pytest

from aegis.crypto_sym import TAG_SIZE, aes_gcm_decrypt_with_key, aes_gcm_encrypt_with_key
from aegis.errors import AuthenticationFailedError


def test_aes_gcm_roundtrip_ok():
    """Comprueba que un cifrado con AES-GCM pueda revertirse correctamente.

    Returns:
        None: Las aserciones evalúan la igualdad entre claro y descifrado.
    """
    key = os.urandom(32)
    plaintext = os.urandom(128)
    nonce, ct = aes_gcm_encrypt_with_key(key, plaintext)
    assert len(nonce) == 12
    assert len(ct) == len(plaintext) + TAG_SIZE
    assert aes_gcm_decrypt_with_key(key, nonce, ct) == plaintext


def test_aes_gcm_detects_tampering_ciphertext():
    """Verifica que cualquier alteración del ciphertext sea detectada.

    Returns:
        None: La expectativa es AuthenticationFailedError al descifrar.
    """
    key = os.urandom(32)
    nonce, ct = aes_gcm_encrypt_with_key(key, b"hola mundo")
    tampered = bytes([ct[0] ^ 1]) + ct[1:]
    with pytest.raises(AuthenticationFailedError):
        aes_gcm_decrypt_with_key(key, nonce, tampered)


def test_aes_gcm_detects_tampering_tag():
    key = os.urandom(32)
    nonce, ct = aes_gcm_encrypt_with_key(key, b"msg")
    bad = ct[:-1] + bytes([ct[-1] ^ 0x80])
    with pytest.raises(AuthenticationFailedError):
        aes_gcm_decrypt_with_key(key, nonce, bad)


def test_aes_gcm_wrong_key_rejected():
    """Garantiza que otra clave no pueda abrir el mensaje.

    Returns:
        None: Se espera AuthenticationFailedError.
    """
    nonce, ct = aes_gcm_encrypt_with_key(os.urandom(32), b"msg")
    with pytest.raises(AuthenticationFailedError):
        aes_gcm_decrypt_with_key(os.urandom(32), nonce, ct)


def test_aes_gcm_nonce_uniqueness():
    """Evalúa que los nonces aleatorios generados no se repitan.

    Returns:
        None: Las aserciones verifican la unicidad dentro del muestreo.
    """
    key = os.urandom(32)
    nonces = set()
    for _ in range(200):
        nonce, _ = aes_gcm_encrypt_with_key(key, b"x")
        assert nonce not in nonces
        nonces.add(nonce)
