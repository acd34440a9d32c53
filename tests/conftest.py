import pytest

from unravel.config import reset_config


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep the user's config file and UNRAVEL_* variables out of tests."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    for key in ("UNRAVEL_MODE", "UNRAVEL_INPUT_FORMAT", "UNRAVEL_OUTPUT_FORMAT",
                "UNRAVEL_INDENT", "UNRAVEL_LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    reset_config()
    yield
    reset_config()
