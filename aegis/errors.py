# --------------------------------------------------------------
# File: errors.py
# Description: Jerarquía de excepciones del motor de sellado.
# --------------------------------------------------------------
"""Excepciones que distinguen fallos recuperables por archivo de fallos fatales."""


class AegisError(Exception):
    """Error base de todas las operaciones de sellado."""


class KeyDerivationError(AegisError):
    """La derivación de clave no pudo completarse por falta de recursos."""


class MalformedArtifactError(AegisError):
    """El artefacto es demasiado corto para contener salt y nonce."""


class AuthenticationFailedError(AegisError):
    """La etiqueta AEAD no coincide: contraseña incorrecta o datos alterados."""


class DestinationExistsError(AegisError):
    """El archivo de destino ya existe y no se sobrescribe."""


class TraversalError(AegisError):
    """El recorrido del directorio no puede continuar; aborta la ejecución."""


class LegacyFormatWarning(UserWarning):
    """El artefacto no contiene la extensión original embebida."""
