"""
Authentication store: user table, current session, login/register/logout.

The user table (with password hashes) is shared by every client profile;
each AuthStore owns a single session slot. The session is either absent
(anonymous) or a SessionUser (authenticated).
"""

from typing import List, Optional

from pydantic import ValidationError as PydanticValidationError

from ..models.security import ClientContext
from ..models.user import SessionUser, UserRecord
from ..safety.rate_limiter import RateLimiter
from ..security.audit_log import SecurityLog
from ..security.hasher import PasswordHasher
from ..security.validators import validate_email, validate_name, validate_password
from ..storage.keys import SESSION_KEY, USERS_KEY
from ..storage.kv_store import KeyValueStore
from ..utils.config import SecuritySettings
from ..utils.exceptions import (
    AuthenticationError,
    RateLimitError,
    RegistrationError,
    StorageError,
    ValidationError,
)
from ..utils.ids import new_id
from ..utils.logger import get_logger

logger = get_logger(__name__)

INVALID_EMAIL_MESSAGE = "Invalid email address"
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"
LOGIN_THROTTLED_MESSAGE = "Too many login attempts. Please try again later."
REGISTER_THROTTLED_MESSAGE = "Too many registration attempts. Please try again later."
EMAIL_TAKEN_MESSAGE = "A user with this email already exists"


class AuthStore:
    """Session state machine on top of the persisted user table"""

    def __init__(
        self,
        storage: KeyValueStore,
        hasher: PasswordHasher,
        rate_limiter: RateLimiter,
        security_log: SecurityLog,
        settings: Optional[SecuritySettings] = None,
        session_key: str = SESSION_KEY,
        context: Optional[ClientContext] = None,
    ):
        self.storage = storage
        self.hasher = hasher
        self.rate_limiter = rate_limiter
        self.security_log = security_log
        self.settings = settings or SecuritySettings()
        self.session_key = session_key
        self.context = context or ClientContext()

        self.is_loading = True
        self._current_user = self._read_session()
        self.is_loading = False

    @property
    def current_user(self) -> Optional[SessionUser]:
        return self._current_user

    @property
    def is_authenticated(self) -> bool:
        return self._current_user is not None

    @property
    def is_admin(self) -> bool:
        return self._current_user is not None and self._current_user.is_admin

    def register(self, name: str, email: str, password: str) -> SessionUser:
        """
        Create a user and start a session for it.

        Raises:
            ValidationError: name, email or password rejected (first failure wins)
            RateLimitError: too many registrations for this email
            RegistrationError: the email is already registered
        """
        name_check = validate_name(name)
        if not name_check.valid:
            self._log("invalid_name_attempt", {"name": name, "email": email})
            raise ValidationError(name_check.message)

        if not validate_email(email):
            self._log("invalid_email_attempt", {"email": email})
            raise ValidationError(INVALID_EMAIL_MESSAGE)

        password_check = validate_password(password)
        if not password_check.valid:
            self._log("weak_password_attempt", {"email": email})
            raise ValidationError(password_check.message)

        allowed = self.rate_limiter.check_and_consume(
            f"register_{email.lower()}",
            self.settings.register_max_attempts,
            self.settings.register_window_seconds,
        )
        if not allowed:
            self._log("rate_limit_exceeded", {"email": email, "action": "register"})
            raise RateLimitError(REGISTER_THROTTLED_MESSAGE, action="register")

        users = self._load_users()
        if self._find_by_email(users, email) is not None:
            self._log("register_failed_email_exists", {"email": email})
            raise RegistrationError(EMAIL_TAKEN_MESSAGE)

        user = UserRecord(
            id=new_id(),
            name=name,
            email=email,
            password=self.hasher.hash(password),
            role="admin" if self._is_seed_admin(name, email) else "user",
        )
        users.append(user)
        self._save_users(users)

        session = SessionUser.from_record(user)
        self._write_session(session)
        self._log("register_success", {"userId": user.id, "email": user.email, "role": user.role})
        logger.info("User registered", user_id=user.id, role=user.role)
        return session

    def login(self, email: str, password: str) -> SessionUser:
        """
        Authenticate by email and password and start a session.

        Unknown email and wrong password raise the same AuthenticationError;
        only the security log tells them apart.
        """
        if not validate_email(email):
            self._log("invalid_email_attempt", {"email": email})
            raise ValidationError(INVALID_EMAIL_MESSAGE)

        allowed = self.rate_limiter.check_and_consume(
            f"login_{email.lower()}",
            self.settings.login_max_attempts,
            self.settings.login_window_seconds,
        )
        if not allowed:
            self._log("rate_limit_exceeded", {"email": email, "action": "login"})
            raise RateLimitError(LOGIN_THROTTLED_MESSAGE, action="login")

        found = self._find_by_email(self._load_users(), email)
        if found is None:
            self._log("login_failed_user_not_found", {"email": email})
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

        if not self.hasher.verify(password, found.password):
            self._log("login_failed_wrong_password", {"email": email, "userId": found.id})
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

        session = SessionUser.from_record(found)
        self._write_session(session)
        self._log("login_success", {"userId": found.id, "email": found.email, "role": found.role})
        return session

    def logout(self) -> None:
        """End the session (idempotent)"""
        if self._current_user is not None:
            self._log("logout", {"userId": self._current_user.id, "email": self._current_user.email})
        self._write_session(None)

    def _load_users(self) -> List[UserRecord]:
        """Load the user table; unreadable data yields an empty table"""
        try:
            raw = self.storage.get(USERS_KEY)
        except StorageError as e:
            logger.warning("Failed to load users", error=str(e))
            return []
        if not isinstance(raw, list):
            return []
        users = []
        for item in raw:
            try:
                users.append(UserRecord(**item))
            except (PydanticValidationError, TypeError) as e:
                logger.warning("Skipping invalid user row", error=str(e))
        return users

    def _save_users(self, users: List[UserRecord]) -> None:
        self.storage.set(USERS_KEY, [u.model_dump() for u in users])

    def _read_session(self) -> Optional[SessionUser]:
        try:
            raw = self.storage.get(self.session_key)
        except StorageError as e:
            logger.warning("Failed to load session", error=str(e))
            return None
        if not isinstance(raw, dict):
            return None
        try:
            return SessionUser(**raw)
        except PydanticValidationError:
            return None

    def _write_session(self, user: Optional[SessionUser]) -> None:
        if user is not None:
            self.storage.set(self.session_key, user.model_dump())
        else:
            self.storage.remove(self.session_key)
        self._current_user = user

    @staticmethod
    def _find_by_email(users: List[UserRecord], email: str) -> Optional[UserRecord]:
        wanted = email.lower()
        return next((u for u in users if u.email.lower() == wanted), None)

    def _is_seed_admin(self, name: str, email: str) -> bool:
        return (
            name.lower() == self.settings.seed_admin_name.lower()
            and email.lower() == self.settings.seed_admin_email.lower()
        )

    def _log(self, event: str, details: dict) -> None:
        self.security_log.record(event, details, self.context)
