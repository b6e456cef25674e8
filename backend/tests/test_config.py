import pytest

from config import get_settings


@pytest.fixture
def fresh_settings():
    get_settings.cache_clear()
    yield get_settings
    get_settings.cache_clear()


def test_admin_accounts_from_csv(monkeypatch, fresh_settings):
    monkeypatch.setenv("ADMIN_EMAIL", "Boss@Example.com, ops@example.com")
    monkeypatch.setenv("ADMIN_PASSWORD", "one,two")
    monkeypatch.setenv("ADMIN_NAME", "Boss")

    accounts = fresh_settings().admin_accounts
    assert [account.email for account in accounts] == ["boss@example.com", "ops@example.com"]
    assert [account.name for account in accounts] == ["Boss", "ops"]


def test_mismatched_admin_lists_fail(monkeypatch, fresh_settings):
    monkeypatch.setenv("ADMIN_EMAIL", "a@example.com,b@example.com")
    monkeypatch.setenv("ADMIN_PASSWORD", "only-one")
    with pytest.raises(RuntimeError):
        fresh_settings()


def test_invalid_default_period_fails(monkeypatch, fresh_settings):
    monkeypatch.setenv("ANALYTICS_DEFAULT_PERIOD", "2w")
    with pytest.raises(RuntimeError):
        fresh_settings()


def test_env_aliases(monkeypatch, fresh_settings):
    monkeypatch.setenv("ENV", "devlopment")
    monkeypatch.setenv("EXPORT_TTL_HOURS", "0")
    settings = fresh_settings()
    assert settings.is_development is True
    assert settings.export_ttl_hours == 1
    assert settings.analytics_default_period == "3m"
