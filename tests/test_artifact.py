# --------------------------------------------------------------
# File: test_artifact.py
# Description: Pruebas del formato en disco salt || nonce || ciphertext.
# --------------------------------------------------------------

import os

import pytest
from pydantic import ValidationError

from aegis.artifact import HEADER_SIZE, decode_artifact, encode_artifact
from aegis.errors import MalformedArtifactError


def test_layout_is_plain_concatenation():
    """Comprueba los desplazamientos exactos del formato.

    Returns:
        None: Las aserciones validan cada región del artefacto.
    """
    salt, nonce, ct = os.urandom(16), os.urandom(12), b"ciphertext+tag"
    data = encode_artifact(salt, nonce, ct)
    assert data[:16] == salt
    assert data[16:28] == nonce
    assert data[28:] == ct

    decoded = decode_artifact(data)
    assert (decoded.salt, decoded.nonce, decoded.payload) == (salt, nonce, ct)


def test_header_only_artifact_decodes_with_empty_payload():
    decoded = decode_artifact(bytes(HEADER_SIZE))
    assert decoded.payload == b""


@pytest.mark.parametrize("size", [0, 1, 16, HEADER_SIZE - 1])
def test_short_artifact_is_malformed(size):
    with pytest.raises(MalformedArtifactError):
        decode_artifact(bytes(size))


def test_encode_rejects_wrong_sizes():
    with pytest.raises(ValidationError):
        encode_artifact(b"short", os.urandom(12), b"")
    with pytest.raises(ValidationError):
        encode_artifact(os.urandom(16), os.urandom(8), b"")
