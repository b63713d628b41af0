import db
from auth import Session
from credentials import hash_credential, needs_rehash, verify_credential
from models import User


def test_hash_round_trip():
    stored = hash_credential("s3cret")
    assert stored != "s3cret"
    assert verify_credential("s3cret", stored)
    assert not verify_credential("wrong", stored)


def test_verify_rejects_empty_values():
    assert not verify_credential("", hash_credential("x"))
    assert not verify_credential("x", None)


def test_plaintext_stored_value_is_compared_directly():
    assert needs_rehash("admin123")
    assert not needs_rehash(hash_credential("admin123"))
    assert verify_credential("admin123", "admin123")
    assert not verify_credential("admin124", "admin123")


class TestLogin:

    def test_correct_credentials(self, database):
        session = Session()
        user = session.login("admin", "admin123")
        assert user.username == "admin"
        assert session.current_user is user
        assert session.is_logged_in
        assert session.is_admin

    def test_wrong_password(self, database):
        session = Session()
        assert session.login("admin", "nope") is None
        assert not session.is_logged_in

    def test_unknown_user(self, database):
        assert Session().login("ghost", "admin123") is None

    def test_logout_clears_session(self, database):
        session = Session()
        session.login("admin", "admin123")
        session.logout()
        assert session.current_user is None
        assert not session.is_admin


class TestRegister:

    def test_new_user(self, database):
        session = Session()
        user = session.register("alice", "pw1", "Alice Smith", "alice@example.com")
        assert user.role == "user"
        assert user.id.startswith("U")
        assert user.created_at is not None
        assert session.current_user == user
        assert not session.is_admin
        assert Session().login("alice", "pw1") is not None

    def test_existing_username_is_refused(self, database):
        session = Session()
        assert session.register("admin", "other", "Impostor", "x@example.com") is None
        assert session.current_user is None
        assert [u.username for u in db.get_all_users()] == ["admin"]


class TestProfile:

    def test_update_requires_login(self, database):
        assert Session().update_profile("Name", "e@example.com") is False

    def test_update_profile_persists(self, database):
        session = Session()
        session.login("admin", "admin123")
        assert session.update_profile("Boss", "boss@example.com") is True
        assert session.current_user.full_name == "Boss"
        stored = db.get_user_by_username("admin")
        assert stored.full_name == "Boss"
        assert stored.email == "boss@example.com"

    def test_change_password_with_wrong_old_password(self, database):
        session = Session()
        session.login("admin", "admin123")
        assert session.change_password("bad", "newpass") is False
        assert Session().login("admin", "admin123") is not None

    def test_change_password_requires_login(self, database):
        assert Session().change_password("admin123", "newpass") is False

    def test_change_password(self, database):
        session = Session()
        session.login("admin", "admin123")
        assert session.change_password("admin123", "newpass") is True
        assert Session().login("admin", "newpass") is not None
        assert Session().login("admin", "admin123") is None
        # the in-memory user follows the new credential
        assert session.change_password("newpass", "third") is True


class TestPlaintextDatabase:

    def test_login_against_plaintext_row_upgrades_it(self, empty_database):
        db.save_user(User(id="U001", username="admin", password="admin123",
                          full_name="System Administrator", role="admin"))
        db.init_db()

        user = Session().login("admin", "admin123")
        assert user is not None
        assert user.is_admin
        stored = db.get_user_by_username("admin").password
        assert stored != "admin123"
        assert not needs_rehash(stored)
        assert Session().login("admin", "admin123") is not None

    def test_wrong_password_leaves_plaintext_row_alone(self, empty_database):
        db.save_user(User(username="bob", password="hunter2"))
        assert Session().login("bob", "hunter3") is None
        assert db.get_user_by_username("bob").password == "hunter2"
