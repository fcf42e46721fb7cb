from function_score_simulator.config import Settings


def test_defaults():
    settings = Settings()
    assert settings.DEFAULT_POINT_COUNT == 100
    assert settings.DEFAULT_SCORE_MODE == "sum"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("DEFAULT_POINT_COUNT", "250")
    monkeypatch.setenv("default_score_mode", "multiply")
    settings = Settings()
    assert settings.DEFAULT_POINT_COUNT == 250
    assert settings.DEFAULT_SCORE_MODE == "multiply"


def test_initializer_override():
    settings = Settings(DEFAULT_POINT_COUNT=5, LOG_LEVEL="DEBUG")
    assert settings.DEFAULT_POINT_COUNT == 5
    assert settings.LOG_LEVEL == "DEBUG"
