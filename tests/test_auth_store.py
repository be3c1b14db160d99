"""Tests for registration, login, logout and session persistence"""

import pytest

from softpack.storage.keys import USERS_KEY
from softpack.utils.exceptions import (
    AuthenticationError,
    RateLimitError,
    RegistrationError,
    ValidationError,
)


class TestRegister:
    def test_register_creates_user_session(self, auth, storage, hasher, event_names):
        user = auth.register("Alice", "alice@example.com", "Passw0rd!")

        assert user.role == "user"
        assert user.email == "alice@example.com"
        assert user.name == "Alice"
        assert auth.is_authenticated
        assert auth.current_user == user
        assert not auth.is_admin
        assert storage.get(auth.session_key)["id"] == user.id
        assert event_names() == ["register_success"]

    def test_password_is_stored_hashed(self, auth, storage, hasher):
        auth.register("Alice", "alice@example.com", "Passw0rd!")
        row = storage.get(USERS_KEY)[0]
        assert row["password"] != "Passw0rd!"
        assert hasher.verify("Passw0rd!", row["password"])

    def test_session_does_not_carry_password_hash(self, auth, storage):
        auth.register("Alice", "alice@example.com", "Passw0rd!")
        assert "password" not in storage.get(auth.session_key)

    def test_seed_admin_gets_admin_role(self, auth):
        user = auth.register("Gademoff", "gademoff@admin.com", "Passw0rd!")
        assert user.role == "admin"
        assert auth.is_admin

    def test_seed_admin_match_is_case_insensitive(self, auth):
        assert auth.register("GADEMOFF", "GadeMoff@Admin.com", "Passw0rd!").role == "admin"

    def test_seed_admin_needs_both_name_and_email(self, make_auth):
        assert make_auth("s1").register("Gademoff", "other@admin.com", "Passw0rd!").role == "user"
        assert make_auth("s2").register("Alice", "gademoff@admin.com", "Passw0rd!").role == "user"

    def test_duplicate_email_rejected_case_insensitively(self, auth, storage, event_names):
        auth.register("Alice", "alice@example.com", "Passw0rd!")
        with pytest.raises(RegistrationError, match="already exists"):
            auth.register("Alice Two", "ALICE@Example.com", "Passw0rd!")
        assert event_names()[-1] == "register_failed_email_exists"
        assert len(storage.get(USERS_KEY)) == 1

    def test_name_is_validated_first(self, auth, event_names):
        with pytest.raises(ValidationError, match="at least 2"):
            auth.register("A", "not-an-email", "weak")
        assert event_names() == ["invalid_name_attempt"]

    def test_invalid_email(self, auth, event_names):
        with pytest.raises(ValidationError, match="Invalid email address"):
            auth.register("Alice", "not-an-email", "weak")
        assert event_names() == ["invalid_email_attempt"]

    def test_weak_password(self, auth, storage, event_names):
        with pytest.raises(ValidationError, match="uppercase"):
            auth.register("Alice", "alice@example.com", "password1")
        assert event_names() == ["weak_password_attempt"]
        assert storage.get(USERS_KEY) is None
        assert not auth.is_authenticated

    def test_registration_rate_limit(self, auth, security_log):
        auth.register("Alice", "alice@example.com", "Passw0rd!")
        for _ in range(2):
            with pytest.raises(RegistrationError):
                auth.register("Alice", "alice@example.com", "Passw0rd!")

        with pytest.raises(RateLimitError) as exc_info:
            auth.register("Alice", "alice@example.com", "Passw0rd!")
        assert exc_info.value.action == "register"

        last = security_log.entries()[-1]
        assert last.event == "rate_limit_exceeded"
        assert last.details["action"] == "register"

    def test_registration_rate_limit_resets(self, auth, clock):
        for _ in range(3):
            with pytest.raises(ValidationError):
                auth.register("Alice", "alice@example.com", "bad")
        # Validation failures do not consume attempts
        auth.register("Alice", "alice@example.com", "Passw0rd!")
        with pytest.raises(RegistrationError):
            auth.register("Alice", "alice@example.com", "Passw0rd!")
        with pytest.raises(RegistrationError):
            auth.register("Alice", "alice@example.com", "Passw0rd!")
        with pytest.raises(RateLimitError):
            auth.register("Alice", "alice@example.com", "Passw0rd!")

        clock.advance(601)
        with pytest.raises(RegistrationError):
            auth.register("Alice", "alice@example.com", "Passw0rd!")

    def test_ids_are_unique(self, make_auth):
        first = make_auth("p1").register("Alice", "alice@example.com", "Passw0rd!")
        second = make_auth("p2").register("Bob", "bob@example.com", "Passw0rd!")
        assert first.id != second.id


class TestLogin:
    @pytest.fixture(autouse=True)
    def registered(self, make_auth):
        make_auth("signup").register("Alice", "Alice@Example.com", "Passw0rd!")

    def test_login_success(self, auth, storage, event_names):
        user = auth.login("alice@example.com", "Passw0rd!")
        assert user.name == "Alice"
        assert user.email == "Alice@Example.com"
        assert auth.current_user == user
        assert storage.get(auth.session_key)["id"] == user.id
        assert event_names()[-1] == "login_success"

    def test_unknown_email_and_wrong_password_look_identical(self, auth, security_log):
        with pytest.raises(AuthenticationError) as unknown:
            auth.login("nobody@example.com", "Passw0rd!")
        with pytest.raises(AuthenticationError) as wrong:
            auth.login("alice@example.com", "WrongPass1")

        assert str(unknown.value) == str(wrong.value) == "Invalid email or password"
        events = [e.event for e in security_log.entries()[-2:]]
        assert events == ["login_failed_user_not_found", "login_failed_wrong_password"]
        assert not auth.is_authenticated

    def test_invalid_email_format(self, auth, event_names):
        with pytest.raises(ValidationError):
            auth.login("alice", "Passw0rd!")
        assert event_names()[-1] == "invalid_email_attempt"

    def test_rate_limit_blocks_even_correct_password(self, auth, event_names):
        for _ in range(5):
            with pytest.raises(AuthenticationError):
                auth.login("alice@example.com", "WrongPass1")

        with pytest.raises(RateLimitError, match="Too many login attempts"):
            auth.login("alice@example.com", "Passw0rd!")
        assert event_names()[-1] == "rate_limit_exceeded"
        assert not auth.is_authenticated

    def test_rate_limit_counts_email_case_variants_together(self, auth):
        for email in ["alice@example.com", "ALICE@example.com", "Alice@Example.com", "alice@EXAMPLE.com", "aLiCe@example.com"]:
            with pytest.raises(AuthenticationError):
                auth.login(email, "WrongPass1")
        with pytest.raises(RateLimitError):
            auth.login("alice@example.com", "Passw0rd!")

    def test_rate_limit_expires(self, auth, clock):
        for _ in range(5):
            with pytest.raises(AuthenticationError):
                auth.login("alice@example.com", "WrongPass1")
        with pytest.raises(RateLimitError):
            auth.login("alice@example.com", "Passw0rd!")

        clock.advance(301)
        assert auth.login("alice@example.com", "Passw0rd!").name == "Alice"

    def test_login_replaces_previous_session(self, make_auth):
        auth = make_auth("switch")
        auth.register("Bob", "bob@example.com", "Passw0rd!")
        user = auth.login("alice@example.com", "Passw0rd!")
        assert auth.current_user == user
        assert make_auth("switch").current_user == user


class TestSession:
    def test_logout(self, auth, storage, security_log):
        user = auth.register("Alice", "alice@example.com", "Passw0rd!")
        auth.logout()

        assert auth.current_user is None
        assert not auth.is_authenticated
        assert storage.get(auth.session_key) is None
        last = security_log.entries()[-1]
        assert last.event == "logout"
        assert last.details == {"userId": user.id, "email": "alice@example.com"}

    def test_logout_when_anonymous_is_noop(self, auth, event_names):
        auth.logout()
        assert auth.current_user is None
        assert event_names() == []

    def test_session_is_restored_from_storage(self, make_auth):
        user = make_auth("profile-a").register("Alice", "alice@example.com", "Passw0rd!")
        restored = make_auth("profile-a")
        assert restored.is_loading is False
        assert restored.current_user == user

    def test_profiles_have_separate_sessions(self, make_auth):
        make_auth("profile-a").register("Alice", "alice@example.com", "Passw0rd!")
        other = make_auth("profile-b")
        assert other.current_user is None

        other.login("alice@example.com", "Passw0rd!")
        make_auth("profile-b").logout()
        assert make_auth("profile-a").current_user is not None

    def test_corrupt_session_loads_anonymous(self, storage, make_auth):
        storage.set("broken", {"id": "1"})
        assert make_auth("broken").current_user is None
        storage.set("broken", "garbage")
        assert make_auth("broken").current_user is None

    def test_rows_without_role_load_as_user(self, storage, auth, hasher):
        storage.set(
            USERS_KEY,
            [{"id": "1", "name": "Old", "email": "old@example.com", "password": hasher.hash("Passw0rd!")}],
        )
        assert auth.login("old@example.com", "Passw0rd!").role == "user"

    def test_invalid_user_rows_are_skipped(self, storage, auth):
        storage.set(USERS_KEY, [{"id": "1"}, "junk"])
        with pytest.raises(AuthenticationError):
            auth.login("old@example.com", "Passw0rd!")
        auth.register("Alice", "alice@example.com", "Passw0rd!")
        assert [row["email"] for row in storage.get(USERS_KEY)] == ["alice@example.com"]

    def test_user_table_is_not_exposed(self, auth):
        auth.register("Alice", "alice@example.com", "Passw0rd!")
        public = [name for name in dir(auth) if not name.startswith("_")]
        assert "load_users" not in public
        assert "password" not in auth.current_user.model_dump()
