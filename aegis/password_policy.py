# --------------------------------------------------------------
# File: password_policy.py
# Description: Evaluación orientativa de contraseñas antes de sellar.
# --------------------------------------------------------------
"""Utilidades para advertir de contraseñas débiles antes de sellar un directorio.

El motor no rechaza ninguna contraseña; la interfaz decide qué hacer con el aviso.
"""

from __future__ import annotations

import re
from typing import List, Tuple

MIN_LENGTH = 12

COMMON = {
    "123456",
    "12345678",
    "123456789",
    "password",
    "qwerty",
    "qwertyuiop",
    "letmein",
    "iloveyou",
    "admin",
    "welcome",
    "passw0rd",
    "secret",
    "changeme",
    "aegis",
}

CLASSES = (
    re.compile(r"[a-z]"),
    re.compile(r"[A-Z]"),
    re.compile(r"\d"),
    re.compile(r"[^\w\s]"),
)


def class_count(password: str) -> int:
    """Cuenta los grupos de caracteres presentes en la contraseña."""

    return sum(1 for pattern in CLASSES if pattern.search(password))


def has_long_repetition(password: str, max_run: int = 3) -> bool:
    return re.search(rf"(.)\1{{{max_run},}}", password) is not None


def check_password_strength(password: str) -> Tuple[bool, List[str], int]:
    """Evalúa la contraseña y devuelve cumplimiento, motivos y puntuación.

    Args:
        password (str): Contraseña propuesta para sellar.

    Returns:
        Tuple[bool, List[str], int]: Resultado, motivos de aviso y puntuación
        entre 0 y 100.

    """

    reasons: List[str] = []
    score = 0

    if len(password) < MIN_LENGTH:
        reasons.append(f"Longitud mínima {MIN_LENGTH}.")
    else:
        score += min(45, 25 + (len(password) - MIN_LENGTH) * 4)

    if class_count(password) < 3:
        reasons.append("Usa al menos 3 de: minúsculas, mayúsculas, dígitos, símbolos.")
    else:
        score += 30

    if password.lower() in COMMON:
        reasons.append("Contraseña demasiado común.")
    else:
        score += 15

    if has_long_repetition(password):
        reasons.append("Evita repeticiones largas del mismo carácter.")
    else:
        score += 10

    return not reasons, reasons, max(0, min(100, score))
