import pytest
from pydantic import ValidationError

from recipe_api.config import Settings


def test_root(client):
    res = client.get("/")
    assert res.status_code == 200
    assert res.json()["name"] == "Recipe API"


def test_health(client):
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"status": "healthy", "database": "connected"}


def test_settings_rewrite_postgres_scheme():
    settings = Settings(database_url="postgres://u:p@db/recipes", jwt_secret="s")
    assert settings.database_url == "postgresql://u:p@db/recipes"


def test_settings_require_jwt_secret():
    with pytest.raises(ValidationError):
        Settings(database_url="sqlite://", jwt_secret="  ")


def test_settings_cors_origins():
    settings = Settings(
        database_url="sqlite://",
        jwt_secret="s",
        frontend_url="http://a.example.com, http://b.example.com",
    )
    assert settings.cors_origins == ["http://a.example.com", "http://b.example.com"]
