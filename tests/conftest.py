import pytest


@pytest.fixture(autouse=True)
def isolate_user_config(tmp_path, monkeypatch):
    """Point goco at an empty config directory and clear provider keys.

    Tests must never read the developer's real configuration, API keys
    or editor settings.
    """
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))
    for var in ("GOCO_GEMINI_KEY", "GOCO_GROQ_KEY", "EDITOR", "VISUAL"):
        monkeypatch.delenv(var, raising=False)
    yield
