"""Email verification (OTP) tests."""

from datetime import UTC, datetime, timedelta
from unittest.mock import patch

import pytest
from sqlalchemy.orm import Session

from bluestar.errors import APIError, ErrorKind
from bluestar.models.otp import OTP
from bluestar.services import otp as otp_service
from bluestar.services.otp import generate_otp, store_otp, verify_otp


def test_generate_otp():
    """Test codes are numeric and of the requested length."""
    code = generate_otp()
    assert len(code) == 6
    assert code.isdigit()
    assert len(generate_otp(8)) == 8


def test_check_email_sends_otp(client, db, email_service):
    """Test requesting an OTP for a new email stores and sends it."""
    response = client.post("/check-email", json={"email": "New@X.com"})
    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "exists": False,
        "message": "OTP sent successfully to your email.",
        "email": "new@x.com",
    }

    record = db.query(OTP).filter(OTP.email == "new@x.com").one()
    email_service.send_otp.assert_awaited_once_with("new@x.com", record.otp)


def test_request_otp_alias(client, db):
    """Test the request-otp route behaves like check-email."""
    response = client.post("/request-otp", json={"email": "new@x.com"})
    assert response.status_code == 200
    assert db.query(OTP).count() == 1


def test_request_otp_twice_replaces_code(client, db, email_service):
    """Test a second request leaves a single live code."""
    client.post("/check-email", json={"email": "new@x.com"})
    client.post("/check-email", json={"email": "new@x.com"})

    record = db.query(OTP).one()
    assert email_service.send_otp.await_count == 2
    assert email_service.send_otp.await_args.args == ("new@x.com", record.otp)


def test_check_email_missing(client):
    """Test the email is required."""
    response = client.post("/check-email", json={})
    assert response.status_code == 400
    assert response.json()["error"] == "MISSING_FIELDS"


def test_check_email_invalid(client, email_service):
    """Test malformed emails are rejected before anything is sent."""
    response = client.post("/check-email", json={"email": "nope"})
    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERR"
    email_service.send_otp.assert_not_awaited()


def test_check_email_registered(client, db, auth_headers, email_service):
    """Test a registered email cannot request an OTP."""
    response = client.post("/check-email", json={"email": auth_headers.email})
    assert response.status_code == 400
    assert response.json()["error"] == "USER_EXISTS"
    assert response.json()["message"] == "Email address taken"
    assert db.query(OTP).count() == 0
    email_service.send_otp.assert_not_awaited()


def test_check_email_send_failure(client, db, email_service):
    """Test a delivery failure is a server error and the stored code is kept."""
    email_service.send_otp.side_effect = ConnectionError("SMTP unavailable")

    response = client.post("/check-email", json={"email": "new@x.com"})
    assert response.status_code == 500
    assert response.json()["error"] == "INTERNAL_ERR"
    assert response.json()["message"] == "Failed to send OTP email"
    assert db.query(OTP).count() == 1


def test_verify_otp(client, db):
    """Test a correct code is accepted once."""
    client.post("/check-email", json={"email": "new@x.com"})
    code = db.query(OTP).one().otp

    response = client.post("/verify-otp", json={"email": "new@x.com", "otp": code})
    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "OTP verified successfully"}
    assert db.query(OTP).count() == 0

    response = client.post("/verify-otp", json={"email": "new@x.com", "otp": code})
    assert response.status_code == 400
    assert response.json()["error"] == "OTP_NOT_FOUND"


def test_verify_otp_wrong_code(client, db):
    """Test a wrong code is rejected and the stored code survives."""
    client.post("/check-email", json={"email": "new@x.com"})
    code = db.query(OTP).one().otp
    wrong = "0" * 6 if code != "0" * 6 else "1" * 6

    response = client.post("/verify-otp", json={"email": "new@x.com", "otp": wrong})
    assert response.status_code == 400
    assert response.json()["error"] == "INVALID_OTP"
    assert db.query(OTP).count() == 1


def test_verify_otp_expired(client, db):
    """Test an expired code is rejected."""
    expired = datetime.now(UTC) - timedelta(minutes=1)
    db.add(OTP(email="old@x.com", otp="123456", expires_at=expired))
    db.commit()

    response = client.post("/verify-otp", json={"email": "old@x.com", "otp": "123456"})
    assert response.status_code == 400
    assert response.json()["error"] == "OTP_EXPIRED"


def test_verify_otp_missing_fields(client):
    """Test email and code are both required."""
    response = client.post("/verify-otp", json={"email": "new@x.com"})
    assert response.status_code == 400
    assert response.json()["message"] == "Email and OTP are required"


def test_verify_otp_within_window(db):
    """Test a code verifies before the ten minute window closes and only once."""
    issued = datetime.now(UTC)
    record = store_otp(db, "new@x.com", now=issued)

    verify_otp(db, "new@x.com", record.otp, now=issued + timedelta(minutes=9))

    with pytest.raises(APIError) as exc_info:
        verify_otp(db, "new@x.com", record.otp, now=issued + timedelta(minutes=9))
    assert exc_info.value.kind == ErrorKind.OTP_NOT_FOUND


def test_verify_otp_after_window(db):
    """Test a code is expired after the window closes."""
    issued = datetime.now(UTC)
    record = store_otp(db, "new@x.com", now=issued)

    with pytest.raises(APIError) as exc_info:
        verify_otp(db, "new@x.com", record.otp, now=issued + timedelta(minutes=11))
    assert exc_info.value.kind == ErrorKind.OTP_EXPIRED


def test_store_otp_when_another_request_inserts_first(db):
    """Test a row created between lookup and insert is updated instead of failing."""
    issued = datetime.now(UTC)
    find_otp = otp_service.find_otp
    lookups = []

    def find_then_insert_elsewhere(session, email):
        record = find_otp(session, email)
        if not lookups:
            # Another request commits its code right after our lookup
            with Session(bind=session.get_bind()) as other:
                stale = issued - timedelta(days=1)
                other.add(OTP(email=email, otp="111111", expires_at=stale))
                other.commit()
        lookups.append(email)
        return record

    with patch("bluestar.services.otp.find_otp", side_effect=find_then_insert_elsewhere):
        record = store_otp(db, "race@x.com", now=issued)

    assert len(lookups) == 2
    assert db.query(OTP).count() == 1
    verify_otp(db, "race@x.com", record.otp, now=issued + timedelta(minutes=1))
    assert db.query(OTP).count() == 0
