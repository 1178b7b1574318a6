import pytest
from pydantic import ValidationError

from riftform.config.settings import Settings, get_settings, reset_settings


@pytest.fixture(autouse=True)
def _fresh_settings():
    reset_settings()
    yield
    reset_settings()


def test_defaults() -> None:
    settings = Settings(_env_file=None)

    assert settings.recent_window_size == 20
    assert settings.trend_slice_size == 5
    assert settings.stability_min_samples == 5
    assert settings.best_champion_min_games == 5
    assert settings.feedback_top_n == 2
    assert settings.is_production is False


def test_environment_overrides(monkeypatch) -> None:
    monkeypatch.setenv("RECENT_WINDOW_SIZE", "10")
    monkeypatch.setenv("best_champion_min_games", "3")
    monkeypatch.setenv("APP_ENV", "production")

    settings = get_settings()

    assert settings.recent_window_size == 10
    assert settings.best_champion_min_games == 3
    assert settings.is_production is True


def test_singleton_until_reset(monkeypatch) -> None:
    first = get_settings()
    assert get_settings() is first

    monkeypatch.setenv("TREND_SLICE_SIZE", "4")
    reset_settings()

    assert get_settings().trend_slice_size == 4


def test_feedback_top_n_is_bounded(monkeypatch) -> None:
    monkeypatch.setenv("FEEDBACK_TOP_N", "3")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
