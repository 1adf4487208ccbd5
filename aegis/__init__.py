# --------------------------------------------------------------
# File: __init__.py
# Description: Exposición pública del motor de sellado de directorios.
# --------------------------------------------------------------
"""Inicializa el paquete `aegis` y documenta sus módulos principales."""

__all__ = [
    "artifact",
    "config",
    "crypto_kdf",
    "crypto_sym",
    "errors",
    "file_cipher",
    "models",
    "orchestrator",
    "password_policy",
    "storage",
    "traversal",
]

__version__ = "0.3.0"
