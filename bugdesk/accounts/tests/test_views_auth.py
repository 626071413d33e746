import pytest
from django.core import mail
from rest_framework.test import APIClient

from accounts.models import OtpCode, User


@pytest.mark.django_db
def test_send_otp_then_verify_registers():
    client = APIClient()

    r1 = client.post("/api/auth/send-otp", {"email": "flow@example.com"}, format="json")
    assert r1.status_code == 200, r1.content
    assert r1.json() == {"message": "OTP sent successfully"}
    assert len(mail.outbox) == 1

    code = OtpCode.objects.get(email="flow@example.com").code
    r2 = client.post("/api/auth/verify-otp/", {
        "name": "Flow", "email": "flow@example.com", "password": "pw123456", "otp": code
    }, format="json")
    assert r2.status_code == 201, r2.content
    body = r2.json()
    assert body["user"]["email"] == "flow@example.com"
    assert set(body["user"]) == {"id", "name", "email"}

    # the issued token authenticates
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {body['token']}")
    assert client.get("/api/projects").status_code == 200


@pytest.mark.django_db
def test_verify_wrong_otp_is_400():
    OtpCode.objects.create(email="w@example.com", code="123456", expires_at="2999-01-01T00:00:00Z")
    resp = APIClient().post("/api/auth/verify-otp", {
        "name": "W", "email": "w@example.com", "password": "pw", "otp": "654321"
    }, format="json")
    assert resp.status_code == 400
    assert resp.json() == {"detail": "Invalid or expired OTP"}
    assert not User.objects.filter(email="w@example.com").exists()


@pytest.mark.django_db
def test_login_api(owner):
    client = APIClient()
    ok = client.post("/api/auth/login", {"email": owner.email, "password": "pass1234"}, format="json")
    assert ok.status_code == 200
    assert ok.json()["user"]["id"] == str(owner.id)

    bad = client.post("/api/auth/login/", {"email": owner.email, "password": "nope"}, format="json")
    assert bad.status_code == 400
    assert bad.json() == {"detail": "Invalid credentials"}


@pytest.mark.django_db
def test_protected_route_requires_token():
    resp = APIClient().get("/api/projects")
    assert resp.status_code == 401
    assert resp.json() == {"detail": "No token provided"}


@pytest.mark.django_db
def test_garbage_token_rejected():
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION="Bearer not-a-jwt")
    resp = client.get("/api/tickets/my-tickets")
    assert resp.status_code == 401
    assert resp.json() == {"detail": "Invalid token"}


@pytest.mark.django_db
def test_token_for_deleted_user_rejected(client_for, outsider):
    client = client_for(outsider)
    outsider.delete()
    resp = client.get("/api/projects")
    assert resp.status_code == 401
    assert resp.json() == {"detail": "User not found"}
