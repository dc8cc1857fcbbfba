import pytest
from fastapi import HTTPException

from dev2050.auth import auth_service
from dev2050.auth.dependencies import ensure_admin_password
from dev2050.common.config import settings


def test_verify_password():
    assert auth_service.verify_password("letmein") is True
    assert auth_service.verify_password("LETMEIN") is False
    assert auth_service.verify_password("") is False


def test_unset_admin_password_never_verifies(monkeypatch):
    monkeypatch.setattr(settings, "ADMIN_PASSWORD", "")
    assert auth_service.verify_password("") is False
    assert auth_service.verify_password("anything") is False


def test_ensure_admin_password_raises_401():
    with pytest.raises(HTTPException) as excinfo:
        ensure_admin_password("nope")
    assert excinfo.value.status_code == 401


async def test_verify_route(client):
    ok = await client.post("/api/auth/verify", json={"password": "letmein"})
    assert ok.status_code == 200
    assert ok.json()["success"] is True

    bad = await client.post("/api/auth/verify", json={"password": "guess"})
    assert bad.status_code == 401
