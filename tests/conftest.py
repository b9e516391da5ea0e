import importlib
import sys
import textwrap
from pathlib import Path

import pytest

# Ensure `src` is on sys.path for tests when not installed editable.
SRC = Path(__file__).resolve().parent.parent / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from callback_promisify.callbacks import reset_callback_names  # noqa: E402
from callback_promisify.config import get_settings  # noqa: E402

FIXTURE_SOURCE = textwrap.dedent(
    '''
    import json


    def fetch(key, callback):
        callback(None, key * 2)


    def explode(reason, cb):
        cb(ValueError(reason))


    def helper(x):
        return x


    class Client:
        def get(self, key, done):
            done(None, {"key": key})
    '''
)


@pytest.fixture(autouse=True)
def _isolated_process_state(monkeypatch):
    # The callback list and cached settings are process-wide; keep tests independent.
    for key in (
        "PROMISIFY_CALLBACK_NAMES_EXTRA",
        "PROMISIFY_DEBUG",
        "PROMISIFY_LOG_LEVEL",
        "PROMISIFY_CALL_TIMEOUT_SECONDS",
    ):
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    reset_callback_names()
    yield
    reset_callback_names()
    get_settings.cache_clear()


@pytest.fixture
def fixture_module(tmp_path, monkeypatch):
    """Write an importable callback-style module and drop it from sys.modules afterwards."""
    created = []

    def _make(name: str) -> str:
        (tmp_path / f"{name}.py").write_text(FIXTURE_SOURCE)
        importlib.invalidate_caches()
        created.append(name)
        return name

    monkeypatch.syspath_prepend(str(tmp_path))
    yield _make
    for name in created:
        sys.modules.pop(name, None)
