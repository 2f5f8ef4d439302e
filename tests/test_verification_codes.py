from datetime import datetime, timedelta

import pytest

from menuhub.core.errors import InvalidCredentialsError, NotFoundError
from menuhub.models.user import Role, User
from menuhub.services.notifications import CodeSender
from menuhub.services.verification import CodeChannel, request_code, verify_code

from tests.fixtures_data import FIXED_NOW, build_session_factory


class RecordingSender(CodeSender):
    def __init__(self):
        self.sent = []

    def send_sms_code(self, phone_number, code):
        self.sent.append(("sms", phone_number, code))

    def send_email_code(self, email, code):
        self.sent.append(("email", email, code))


def _seed():
    db = build_session_factory()()
    db.add(User(id=1, phone_number="09120000001", email="owner@example.com", password_hash="x", role=Role.USER))
    db.commit()
    return db


@pytest.mark.parametrize(
    "channel, identifier",
    [(CodeChannel.SMS, "09120000001"), (CodeChannel.EMAIL, "owner@example.com")],
)
def test_requested_code_is_sent_and_accepted_once(channel, identifier):
    db = _seed()
    sender = RecordingSender()

    code = request_code(db, channel, identifier, sender, now=FIXED_NOW)
    user = verify_code(db, channel, identifier, code, now=FIXED_NOW + timedelta(minutes=1))

    assert sender.sent == [(channel.value, identifier, code)]
    assert user.id == 1
    with pytest.raises(InvalidCredentialsError):
        verify_code(db, channel, identifier, code, now=FIXED_NOW + timedelta(minutes=2))


def test_new_request_overwrites_previous_code():
    db = _seed()
    sender = RecordingSender()

    first = request_code(db, CodeChannel.SMS, "09120000001", sender, now=FIXED_NOW)
    second = request_code(db, CodeChannel.SMS, "09120000001", sender, now=FIXED_NOW)
    while second == first:
        second = request_code(db, CodeChannel.SMS, "09120000001", sender, now=FIXED_NOW)

    with pytest.raises(InvalidCredentialsError):
        verify_code(db, CodeChannel.SMS, "09120000001", first, now=FIXED_NOW)
    assert verify_code(db, CodeChannel.SMS, "09120000001", second, now=FIXED_NOW).id == 1


def test_code_expires_after_ttl():
    db = _seed()
    code = request_code(db, CodeChannel.EMAIL, "owner@example.com", RecordingSender(), now=FIXED_NOW)

    with pytest.raises(InvalidCredentialsError) as exc:
        verify_code(db, CodeChannel.EMAIL, "owner@example.com", code, now=FIXED_NOW + timedelta(minutes=5, seconds=1))

    assert exc.value.detail == "Invalid or expired verification code"


def test_code_is_accepted_at_exact_expiry():
    db = _seed()
    code = request_code(db, CodeChannel.SMS, "09120000001", RecordingSender(), now=FIXED_NOW)

    user = verify_code(db, CodeChannel.SMS, "09120000001", code, now=FIXED_NOW + timedelta(minutes=5))

    assert user.sms_code is None
    assert user.sms_code_expires_at is None


def test_wrong_code_keeps_stored_code_for_retry():
    db = _seed()
    code = request_code(db, CodeChannel.SMS, "09120000001", RecordingSender(), now=FIXED_NOW)
    wrong = "000000" if code != "000000" else "111111"

    with pytest.raises(InvalidCredentialsError):
        verify_code(db, CodeChannel.SMS, "09120000001", wrong, now=FIXED_NOW)

    assert verify_code(db, CodeChannel.SMS, "09120000001", code, now=FIXED_NOW).id == 1


def test_channels_keep_independent_codes():
    db = _seed()
    sms_code = request_code(db, CodeChannel.SMS, "09120000001", RecordingSender(), now=FIXED_NOW)
    request_code(db, CodeChannel.EMAIL, "owner@example.com", RecordingSender(), now=FIXED_NOW)

    verify_code(db, CodeChannel.SMS, "09120000001", sms_code, now=FIXED_NOW)
    user = db.get(User, 1)

    assert user.email_code is not None


def test_unknown_identifier_is_not_found():
    db = _seed()

    with pytest.raises(NotFoundError) as exc:
        request_code(db, CodeChannel.SMS, "09129999999", RecordingSender(), now=FIXED_NOW)

    assert exc.value.detail == "User not found"


def test_code_without_request_is_rejected():
    db = _seed()

    with pytest.raises(InvalidCredentialsError):
        verify_code(db, CodeChannel.EMAIL, "owner@example.com", "123456", now=FIXED_NOW)


def test_code_is_rejected_with_surrounding_whitespace():
    db = _seed()
    code = request_code(db, CodeChannel.SMS, "09120000001", RecordingSender(), now=FIXED_NOW)

    with pytest.raises(InvalidCredentialsError):
        verify_code(db, CodeChannel.SMS, "09120000001", f" {code} ", now=FIXED_NOW)

    assert verify_code(db, CodeChannel.SMS, "09120000001", code, now=FIXED_NOW).id == 1


def test_concurrent_verifications_redeem_code_once():
    session_factory = build_session_factory()
    seed = session_factory()
    seed.add(User(id=1, phone_number="09120000001", email="owner@example.com", password_hash="x", role=Role.USER))
    seed.commit()
    code = request_code(seed, CodeChannel.SMS, "09120000001", RecordingSender(), now=FIXED_NOW)

    first = session_factory()
    second = session_factory()
    # both requests have read the outstanding code before either consumes it
    assert first.get(User, 1).sms_code == code
    assert second.get(User, 1).sms_code == code

    winner = verify_code(first, CodeChannel.SMS, "09120000001", code, now=FIXED_NOW)
    with pytest.raises(InvalidCredentialsError):
        verify_code(second, CodeChannel.SMS, "09120000001", code, now=FIXED_NOW)

    assert winner.id == 1
    assert winner.sms_code is None
