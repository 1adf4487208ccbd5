import os
from dotenv import load_dotenv
load_dotenv()

# Marca de formato: no es configurable porque identifica los artefactos sellados.
ARTIFACT_SUFFIX = ".aegis"
# Sufijo de los temporales de escritura; el recorrido nunca los procesa.
TEMP_SUFFIX = ".aegis-tmp"

DEFAULT_EXCLUDED_DIRS = ".git,vendor,node_modules,target"
EXCLUDED_DIRS = frozenset(
    name.strip()
    for name in os.getenv("AEGIS_EXCLUDE_DIRS", DEFAULT_EXCLUDED_DIRS).split(",")
    if name.strip()
)


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


WORKERS = max(1, _int_env("AEGIS_WORKERS", 1))
LOG_LEVEL = os.getenv("AEGIS_LOG_LEVEL", "INFO").upper()
