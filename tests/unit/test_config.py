import pytest

from bizcrm.utils import config


@pytest.mark.parametrize(
    "value,expected",
    [("3600", 3600), ("30s", 30), ("15m", 900), ("24h", 86400), ("7d", 604800), (" 2H ", 7200)],
)
def test_parse_duration(value, expected):
    assert config.parse_duration(value) == expected


@pytest.mark.parametrize("value", ["", "abc", "10w", "0", "-5m"])
def test_parse_duration_rejects_bad_values(value):
    with pytest.raises(ValueError):
        config.parse_duration(value)


def test_jwt_secret_from_env(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "s3cret")
    assert config.get_jwt_secret() == "s3cret"


def test_jwt_secret_dev_default_under_tests(monkeypatch):
    monkeypatch.delenv("JWT_SECRET", raising=False)
    assert config.get_jwt_secret() == "dev-secret-change-me"


def test_cors_origins(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example,")
    assert config.get_cors_origins() == ["https://a.example", "https://b.example"]
    monkeypatch.delenv("CORS_ORIGINS")
    assert config.get_cors_origins() == config.DEFAULT_CORS_ORIGINS


def test_numeric_settings(monkeypatch):
    monkeypatch.setenv("MAX_FILE_SIZE", "1024")
    monkeypatch.setenv("DEFAULT_WAREHOUSE_ID", "3")
    assert config.get_max_file_size() == 1024
    assert config.get_default_warehouse_id() == 3
