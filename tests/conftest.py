import sys
from pathlib import Path

# Ensure the project root is on sys.path so `solver`, `backend` and `main` are importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import matplotlib

matplotlib.use("Agg")
import pytest

from solver import storage


@pytest.fixture(autouse=True)
def _isolated_data_dir(monkeypatch, tmp_path: Path) -> Path:
    data_dir = tmp_path / "data"
    monkeypatch.setattr(storage, "_DATA_DIR", str(data_dir))
    return data_dir
