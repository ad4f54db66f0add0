import re
import secrets
import uuid
from abc import ABC, abstractmethod
from typing import Dict, Iterable, Optional

from yummio.core.logging_config import get_logger
from yummio.models import AuthResult, StoredUser, User

logger = get_logger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 6
DEFAULT_AVATAR = (
    "https://images.pexels.com/photos/1239291/pexels-photo-1239291.jpeg"
    "?auto=compress&cs=tinysrgb&w=150&h=150&dpr=2"
)

DEMO_USERS = (
    StoredUser(
        id="1",
        name="Demo User",
        email="demo@yummio.com",
        password="password123",
        avatar=DEFAULT_AVATAR,
    ),
    StoredUser(
        id="2",
        name="Chef Sarah",
        email="sarah@yummio.com",
        password="chef2024",
        avatar=(
            "https://images.pexels.com/photos/774909/pexels-photo-774909.jpeg"
            "?auto=compress&cs=tinysrgb&w=150&h=150&dpr=2"
        ),
    ),
)


class UserRepository(ABC):
    @abstractmethod
    def find_by_email(self, email: str) -> Optional[StoredUser]:
        """Case-insensitive lookup."""
        pass

    @abstractmethod
    def add(self, user: StoredUser) -> None:
        pass


class InMemoryUserRepository(UserRepository):
    def __init__(self, seed: Iterable[StoredUser] = DEMO_USERS):
        self._users: Dict[str, StoredUser] = {u.email.lower(): u for u in seed}

    def find_by_email(self, email: str) -> Optional[StoredUser]:
        return self._users.get(email.lower())

    def add(self, user: StoredUser) -> None:
        self._users[user.email.lower()] = user


def _failure(error_code: str, message: str) -> AuthResult:
    return AuthResult(success=False, error=message, error_code=error_code)


def _missing_fields() -> AuthResult:
    return _failure("MISSING_FIELDS", "Please fill in all fields")


def _invalid_email() -> AuthResult:
    return _failure("INVALID_EMAIL", "Please enter a valid email address")


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email))


class AuthService:
    """Mock account handling backed by an injected user repository.

    Each successful sign-in or sign-up opens its own session, identified by
    the returned token.
    """

    def __init__(self, repository: UserRepository):
        self.repository = repository
        self.sessions: Dict[str, User] = {}

    def sign_in(self, email: str, password: str) -> AuthResult:
        if not email or not password:
            return _missing_fields()
        if not is_valid_email(email):
            return _invalid_email()

        stored = self.repository.find_by_email(email)
        if stored is None or stored.password != password:
            logger.info(f"Rejected sign-in for {email}")
            return _failure("INVALID_CREDENTIALS", "Invalid email or password")

        return self._open_session(stored.to_user())

    def sign_up(self, name: str, email: str, password: str) -> AuthResult:
        if not name or not email or not password:
            return _missing_fields()
        if not is_valid_email(email):
            return _invalid_email()
        if len(password) < MIN_PASSWORD_LENGTH:
            return _failure(
                "WEAK_PASSWORD",
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
            )
        if self.repository.find_by_email(email) is not None:
            return _failure("EMAIL_EXISTS", "An account with this email already exists")

        stored = StoredUser(
            id=uuid.uuid4().hex,
            name=name.strip(),
            email=email.lower(),
            password=password,
            avatar=DEFAULT_AVATAR,
        )
        self.repository.add(stored)
        logger.info(f"Created account {stored.id} for {stored.email}")

        return self._open_session(stored.to_user())

    def reset_password(self, email: str) -> AuthResult:
        if not email:
            return _failure("MISSING_FIELDS", "Please enter your email address")
        if not is_valid_email(email):
            return _invalid_email()
        if self.repository.find_by_email(email) is None:
            return _failure("ACCOUNT_NOT_FOUND", "No account found with this email address")
        # No mail is sent; a real backend would issue a reset link here.
        return AuthResult(success=True)

    def current_user(self, token: Optional[str]) -> Optional[User]:
        if not token:
            return None
        return self.sessions.get(token)

    def sign_out(self, token: Optional[str]) -> bool:
        if not token:
            return False
        return self.sessions.pop(token, None) is not None

    def _open_session(self, user: User) -> AuthResult:
        token = secrets.token_urlsafe(32)
        self.sessions[token] = user
        return AuthResult(success=True, user=user, token=token)
