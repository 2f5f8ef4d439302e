import pytest

from menuhub.core.errors import ConflictError, InvalidCredentialsError, MalformedInputError, NotFoundError
from menuhub.models.user import Role, User
from menuhub.services import accounts
from menuhub.services.admin_bootstrap import upsert_admin_user
from menuhub.services.verification import CodeChannel

from tests.fixtures_data import OTHER_OWNER, OWNER, build_session_factory, build_token_service


class _Sender:
    def __init__(self):
        self.codes = []

    def send_sms_code(self, phone_number, code):
        self.codes.append(code)

    def send_email_code(self, email, code):
        self.codes.append(code)


def test_signup_then_password_login_issues_user_token():
    db = build_session_factory()()
    service = build_token_service()

    user = accounts.signup(db, **OWNER)
    token = accounts.login_with_password(
        db, service, phone_number=OWNER["phone_number"], password=OWNER["password"]
    )
    claims = service.validate(token)

    assert user.role is Role.USER
    assert user.password_hash != OWNER["password"]
    assert claims.user_id == user.id
    assert claims.role is Role.USER


def test_signup_rejects_invalid_phone():
    db = build_session_factory()()

    with pytest.raises(MalformedInputError) as exc:
        accounts.signup(db, phone_number="12345", email="a@example.com", password="secret1")

    assert exc.value.detail == "Invalid phone number format"


def test_signup_rejects_duplicates():
    db = build_session_factory()()
    accounts.signup(db, **OWNER)

    with pytest.raises(ConflictError):
        accounts.signup(db, phone_number=OWNER["phone_number"], email="new@example.com", password="secret1")
    with pytest.raises(ConflictError):
        accounts.signup(db, phone_number="09129999999", email=OWNER["email"], password="secret1")


@pytest.mark.parametrize(
    "phone_number, password",
    [(OWNER["phone_number"], "wrong-pass"), ("09129999999", OWNER["password"])],
)
def test_password_login_failures_look_the_same(phone_number, password):
    db = build_session_factory()()
    accounts.signup(db, **OWNER)

    with pytest.raises(InvalidCredentialsError) as exc:
        accounts.login_with_password(db, build_token_service(), phone_number=phone_number, password=password)

    assert exc.value.detail == "Invalid credentials"


def test_code_login_issues_token():
    db = build_session_factory()()
    service = build_token_service()
    sender = _Sender()
    user = accounts.signup(db, **OWNER)

    accounts.request_login_code(db, sender, channel=CodeChannel.EMAIL, identifier=" Owner@Example.com ")
    token = accounts.login_with_code(
        db, service, channel=CodeChannel.EMAIL, identifier=OWNER["email"], code=sender.codes[-1]
    )

    assert service.validate(token).user_id == user.id


def test_role_change_applies_to_tokens_issued_afterwards():
    db = build_session_factory()()
    service = build_token_service()
    user = accounts.signup(db, **OWNER)
    old_token = accounts.login_with_password(
        db, service, phone_number=OWNER["phone_number"], password=OWNER["password"]
    )

    accounts.assign_role(db, user.id, "admin")
    new_token = accounts.login_with_password(
        db, service, phone_number=OWNER["phone_number"], password=OWNER["password"]
    )

    assert service.validate(old_token).role is Role.USER
    assert service.validate(new_token).role is Role.ADMIN


def test_assign_role_rejects_unknown_role():
    db = build_session_factory()()
    user = accounts.signup(db, **OWNER)

    with pytest.raises(MalformedInputError) as exc:
        accounts.assign_role(db, user.id, "superuser")

    assert exc.value.detail == "Invalid role"


def test_update_user_changes_password_and_keeps_other_fields():
    db = build_session_factory()()
    service = build_token_service()
    user = accounts.signup(db, **OWNER)

    accounts.update_user(db, user.id, password="brand-new")

    with pytest.raises(InvalidCredentialsError):
        accounts.login_with_password(db, service, phone_number=OWNER["phone_number"], password=OWNER["password"])
    assert accounts.login_with_password(db, service, phone_number=OWNER["phone_number"], password="brand-new")
    assert accounts.get_user(db, user.id).email == OWNER["email"]


def test_deleted_user_disappears_and_cannot_log_in():
    db = build_session_factory()()
    user = accounts.signup(db, **OWNER)
    accounts.signup(db, **OTHER_OWNER)

    accounts.delete_user(db, user.id)

    assert [u.email for u in accounts.list_users(db)] == [OTHER_OWNER["email"]]
    with pytest.raises(NotFoundError):
        accounts.get_user(db, user.id)
    with pytest.raises(InvalidCredentialsError):
        accounts.login_with_password(
            db, build_token_service(), phone_number=OWNER["phone_number"], password=OWNER["password"]
        )
    assert db.get(User, user.id).deleted_at is not None


def test_upsert_admin_user_creates_then_promotes():
    db = build_session_factory()()
    existing = accounts.signup(db, **OWNER)

    promoted, created = upsert_admin_user(
        db, phone_number=OWNER["phone_number"], email=OWNER["email"], password=None
    )
    fresh, fresh_created = upsert_admin_user(
        db, phone_number="09120000009", email="root@example.com", password="root-pass"
    )

    assert created is False
    assert promoted.id == existing.id
    assert promoted.role is Role.ADMIN
    assert fresh_created is True
    assert fresh.role is Role.ADMIN


def test_upsert_admin_user_requires_password_for_new_account():
    db = build_session_factory()()

    with pytest.raises(ValueError):
        upsert_admin_user(db, phone_number="09120000009", email="root@example.com", password=None)
