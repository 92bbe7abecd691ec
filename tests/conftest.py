import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture(autouse=True)
def isolated_playguard_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.startswith("PLAYGUARD_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def skip_dotenv(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("playguard.__main__.load_dotenv", lambda *_args, **_kwargs: False)
