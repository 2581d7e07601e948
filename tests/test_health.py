import pytest
from django.db import DatabaseError

from api.models import CustomUser

pytestmark = pytest.mark.django_db


def test_health_is_public(api_client):
    response = api_client.get("/health/")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_health_ignores_stale_tokens(api_client):
    api_client.credentials(HTTP_AUTHORIZATION="Bearer not-a-token")
    assert api_client.get("/health/").status_code == 200


def test_database_health(api_client):
    response = api_client.get("/health/db/")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "db": "connected"}


def test_database_down_is_503(api_client, monkeypatch):
    def unreachable():
        raise DatabaseError("connection refused")

    monkeypatch.setattr(CustomUser.objects, "count", unreachable)
    response = api_client.get("/health/db/")
    assert response.status_code == 503
    assert response.json() == {"status": "error", "db": "disconnected"}
