import base64

from personapi.config import Settings
from personapi.db.models import UserRole
from personapi.db.users import authenticate, hash_password, new_user, password_matches

FAST = Settings(password_iterations=1000)


def _add_user(db_session, username="alice", password="supersecret", settings=FAST):
    user = new_user(username, password, role=UserRole.person, settings=settings)
    db_session.add(user)
    db_session.commit()
    return user


def test_new_user_stores_pbkdf2_material():
    user = new_user("alice", "supersecret", role=UserRole.admin, settings=FAST)
    assert user.password_iterations == 1000
    assert len(base64.b64decode(user.password_salt)) == 16
    assert len(base64.b64decode(user.password_hash)) == 32
    assert password_matches(user, "supersecret")
    assert not password_matches(user, "wrong")


def test_malformed_material_never_matches():
    user = new_user("alice", "supersecret", role=UserRole.admin, settings=FAST)
    user.password_salt = "***"
    assert not password_matches(user, "supersecret")


def test_pepper_changes_the_hash():
    salt = b"0" * 16
    _, plain, _ = hash_password("supersecret", settings=FAST, salt=salt)
    peppered_settings = Settings(password_iterations=1000, password_pepper="pepper")
    _, peppered, _ = hash_password("supersecret", settings=peppered_settings, salt=salt)
    assert plain != peppered


def test_authenticate_uses_the_configured_pepper(db_session):
    peppered = Settings(password_iterations=1000, password_pepper="pepper")
    _add_user(db_session, settings=peppered)

    assert authenticate(db_session, "alice", "supersecret", settings=peppered).username == "alice"
    assert authenticate(db_session, "alice", "supersecret", settings=FAST) is None


def test_authenticate(db_session):
    _add_user(db_session)
    assert authenticate(db_session, "alice", "supersecret", settings=FAST).username == "alice"
    assert authenticate(db_session, "alice", "nope", settings=FAST) is None
    assert authenticate(db_session, "nobody", "supersecret", settings=FAST) is None


def test_inactive_user_cannot_authenticate(db_session):
    user = _add_user(db_session)
    user.is_active = False
    db_session.commit()
    assert authenticate(db_session, "alice", "supersecret", settings=FAST) is None
