import pytest

from bktreex import config as bx_config

_ENV_VARS = (
    "BKTREEX_METRIC",
    "BKTREEX_TRAVERSAL",
    "BKTREEX_ENABLE_DIAGNOSTICS",
    "BKTREEX_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def reset_runtime_context(monkeypatch: pytest.MonkeyPatch):
    for key in _ENV_VARS:
        monkeypatch.delenv(key, raising=False)
    bx_config.reset_runtime_context()
    yield
    bx_config.reset_runtime_context()
