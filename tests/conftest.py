# --------------------------------------------------------------
# File: conftest.py
# Description: Fixtures compartidas para aislar la configuración y crear árboles.
# --------------------------------------------------------------

import importlib
from typing import Iterator

import pytest

PASSWORD = "C0rrect-Horse-Battery!"


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch) -> Iterator[None]:
    """Fija las variables AEGIS_* y recarga aegis.config para cada prueba.

    Args:
        monkeypatch (pytest.MonkeyPatch): Fixture para ajustar variables de entorno.

    Returns:
        Iterator[None]: Control del fixture autouse durante la ejecución de cada test.
    """
    monkeypatch.delenv("AEGIS_EXCLUDE_DIRS", raising=False)
    monkeypatch.setenv("AEGIS_WORKERS", "1")
    monkeypatch.setenv("AEGIS_LOG_LEVEL", "INFO")

    import aegis.config as config_module

    importlib.reload(config_module)

    yield


@pytest.fixture
def password() -> str:
    return PASSWORD


@pytest.fixture
def sample_tree(tmp_path):
    """Crea un directorio con un archivo de texto y una dependencia excluida.

    Args:
        tmp_path (Path): Carpeta temporal proporcionada por pytest.

    Returns:
        Path: Raíz del árbol con ``notes.txt`` y ``vendor/lib.bin``.
    """
    root = tmp_path / "project"
    root.mkdir()
    (root / "notes.txt").write_bytes(b"hello")
    (root / "vendor").mkdir()
    (root / "vendor" / "lib.bin").write_bytes(b"\x00\x01\x02")
    return root
