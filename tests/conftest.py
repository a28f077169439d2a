import sys
from pathlib import Path

import pytest

# Ensure the src layout is importable as top-level `iris_sdk`
PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_ROOT = PROJECT_ROOT / "src"
if SRC_ROOT.exists() and str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

_IRIS_ENV_VARS = (
    "IRIS_ENV",
    "IRIS_API_KEY",
    "IRIS_LOCAL_API_KEY",
    "IRIS_PROD_API_KEY",
    "IRIS_USER_ID",
    "IRIS_API_URL",
    "IRIS_URL",
    "FL_API_URL",
    "IRIS_LOCAL_URL",
    "FL_API_LOCAL_URL",
)


@pytest.fixture(autouse=True)
def _clean_iris_env(monkeypatch):
    for name in _IRIS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
