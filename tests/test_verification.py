import pytest

from marketplace.features.auth.dependencies import get_email_sender

from tests.fakes import FailingEmailSender


@pytest.fixture
def registered_email(client, unique_email):
    response = client.post(
        "/api/v1/auth/signup",
        json={"name": "Gator", "email": unique_email, "password": "pw"},
    )
    assert response.status_code == 201
    return unique_email


def test_send_verification_code(client, registered_email, outbox):
    response = client.post("/api/v1/auth/send-verification-code", json={"email": registered_email})

    assert response.status_code == 200, response.json()
    data = response.json()
    assert "active for 3 minutes" in data["message"]
    assert data["data"]["email"] == registered_email

    assert len(outbox.messages) == 1
    assert outbox.messages[0]["to"] == registered_email
    assert outbox.messages[0]["subject"] == "UFMarketPlace Verification Code"


def test_send_verification_code_unknown_email(client, outbox):
    response = client.post("/api/v1/auth/send-verification-code", json={"email": "nobody@ufl.edu"})

    assert response.status_code == 404
    assert response.json()["data"]["error_code"] == "USER_NOT_FOUND"
    assert outbox.messages == []


def test_send_verification_code_missing_email(client):
    response = client.post("/api/v1/auth/send-verification-code", json={})

    assert response.status_code == 400
    assert response.json()["data"]["error_code"] == "MISSING_FIELDS"


def test_send_verification_code_delivery_failure(client, test_app, registered_email):
    test_app.dependency_overrides[get_email_sender] = lambda: FailingEmailSender()

    response = client.post("/api/v1/auth/send-verification-code", json={"email": registered_email})

    assert response.status_code == 502
    assert response.json()["data"]["error_code"] == "DELIVERY_FAILED"


def test_verify_code_success(client, registered_email, outbox):
    client.post("/api/v1/auth/send-verification-code", json={"email": registered_email})

    response = client.post(
        "/api/v1/auth/verify-code",
        json={"email": registered_email, "code": outbox.last_code()},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["message"] == f"Email {registered_email} successfully verified"
    assert data["data"]["already_verified"] is False
    assert isinstance(data["data"]["user_id"], int)


def test_verify_code_twice_is_idempotent(client, registered_email, outbox):
    client.post("/api/v1/auth/send-verification-code", json={"email": registered_email})
    code = outbox.last_code()
    first = client.post("/api/v1/auth/verify-code", json={"email": registered_email, "code": code})

    second = client.post("/api/v1/auth/verify-code", json={"email": registered_email, "code": code})

    assert second.status_code == 200
    assert second.json()["message"] == "Email associated with account is already verified"
    assert second.json()["data"]["already_verified"] is True
    assert second.json()["data"]["user_id"] == first.json()["data"]["user_id"]


def test_send_code_after_verification_is_rejected(client, registered_email, outbox):
    client.post("/api/v1/auth/send-verification-code", json={"email": registered_email})
    client.post("/api/v1/auth/verify-code", json={"email": registered_email, "code": outbox.last_code()})

    response = client.post("/api/v1/auth/send-verification-code", json={"email": registered_email})

    assert response.status_code == 400
    assert response.json()["data"]["error_code"] == "ALREADY_VERIFIED"


def test_verify_code_without_sending(client, registered_email):
    response = client.post("/api/v1/auth/verify-code", json={"email": registered_email, "code": "123456"})

    assert response.status_code == 400
    assert response.json()["data"]["error_code"] == "NO_ACTIVE_CODE"


def test_verify_code_mismatch(client, registered_email, outbox):
    client.post("/api/v1/auth/send-verification-code", json={"email": registered_email})
    wrong = "000000" if outbox.last_code() != "000000" else "111111"

    response = client.post("/api/v1/auth/verify-code", json={"email": registered_email, "code": wrong})

    assert response.status_code == 401
    assert response.json()["data"]["error_code"] == "CODE_MISMATCH"


def test_superseded_code_is_rejected(client, registered_email, outbox):
    client.post("/api/v1/auth/send-verification-code", json={"email": registered_email})
    first = outbox.last_code()
    client.post("/api/v1/auth/send-verification-code", json={"email": registered_email})
    second = outbox.last_code()

    if first != second:
        stale = client.post("/api/v1/auth/verify-code", json={"email": registered_email, "code": first})
        assert stale.status_code == 401

    response = client.post("/api/v1/auth/verify-code", json={"email": registered_email, "code": second})
    assert response.status_code == 200


def test_verify_code_unknown_email(client):
    response = client.post("/api/v1/auth/verify-code", json={"email": "nobody@ufl.edu", "code": "123456"})

    assert response.status_code == 404


def test_verify_code_missing_code(client, registered_email):
    response = client.post("/api/v1/auth/verify-code", json={"email": registered_email})

    assert response.status_code == 400
    assert response.json()["data"]["error_code"] == "MISSING_FIELDS"
