"""
Service for administrative user accounts

Owns the three account state machines:

- login throttling: failed attempts inside a window are counted, and once
  the limit is reached every attempt is refused until the cooldown ends
- email confirmation: unconfirmed -> confirmed, never back
- password reset: none -> pending -> none, on redemption or expiry

The throttle counters are changed only by login(); nothing else writes them.
"""

import hmac
import secrets
from typing import Callable

from sqlalchemy.exc import IntegrityError
from werkzeug.security import check_password_hash, generate_password_hash

from roots_app.database.models import EmailConfirmation, PasswordResetState, User, epoch_now
from roots_app.repositories.account_repository import UserRepository
from roots_app.repositories.genealogy_repository import IndividualRepository
from roots_app.services.base_service import BaseService
from roots_app.services.exceptions import (
    AuthenticationError,
    ConflictError,
    DuplicateEmailError,
    ExpiredTokenError,
    InvalidTokenError,
    LoginCooldownError,
    MissingReferenceError,
    NotFoundError,
    ValidationError,
    handle_service_exceptions,
)
from roots_app.shared.logging_config import get_project_logger
from roots_app.shared.validators import parse_id


logger = get_project_logger(__name__)

DEFAULT_MAX_LOGIN_ATTEMPTS = 5
DEFAULT_LOGIN_COOLDOWN_SECONDS = 15 * 60
DEFAULT_PASSWORD_RESET_TTL_SECONDS = 60 * 60
MIN_PASSWORD_LENGTH = 8
MAX_EMAIL_LENGTH = 100


def generate_token() -> str:
    """32 hex characters, the width of the confirmation and reset columns"""
    return secrets.token_hex(16)


def normalize_email(email: str | None) -> str:
    if not email or not isinstance(email, str):
        raise ValidationError("Missing required fields: email")
    email = email.strip().lower()
    local, _, domain = email.partition('@')
    if not local or not domain or len(email) > MAX_EMAIL_LENGTH:
        raise ValidationError(f"Invalid email address: {email!r}")
    return email


def _tokens_match(expected: str | None, given: str | None) -> bool:
    if not expected or not given or not isinstance(given, str):
        return False
    # Compared as bytes, compare_digest refuses non-ASCII str
    return hmac.compare_digest(expected.encode('utf-8'), given.strip().encode('utf-8'))


class AccountService(BaseService):
    """Registration, login throttling, email confirmation and password reset"""

    def __init__(self, db_session=None,
                 max_login_attempts: int = DEFAULT_MAX_LOGIN_ATTEMPTS,
                 cooldown_seconds: int = DEFAULT_LOGIN_COOLDOWN_SECONDS,
                 reset_ttl_seconds: int | None = DEFAULT_PASSWORD_RESET_TTL_SECONDS,
                 clock: Callable[[], int] | None = None):
        super().__init__(db_session)
        if max_login_attempts < 1:
            raise ValueError("max_login_attempts must be at least 1")
        self.users = UserRepository(self.db_session)
        self.individuals = IndividualRepository(self.db_session)
        self.max_login_attempts = max_login_attempts
        self.cooldown_seconds = cooldown_seconds
        self.reset_ttl_seconds = reset_ttl_seconds
        self.clock = clock or epoch_now

    @classmethod
    def from_config(cls, config, db_session=None) -> 'AccountService':
        """Build the service from a Flask app.config mapping"""
        return cls(
            db_session=db_session,
            max_login_attempts=config.get('LOGIN_MAX_ATTEMPTS', DEFAULT_MAX_LOGIN_ATTEMPTS),
            cooldown_seconds=config.get('LOGIN_COOLDOWN_SECONDS', DEFAULT_LOGIN_COOLDOWN_SECONDS),
            reset_ttl_seconds=config.get('PASSWORD_RESET_TTL_SECONDS', DEFAULT_PASSWORD_RESET_TTL_SECONDS),
        )

    # Accounts

    @handle_service_exceptions(logger)
    def register(self, email: str, password: str, individual_id=None) -> User:
        """
        Create an unconfirmed account

        The returned user carries the email confirmation code to deliver.
        """
        email = normalize_email(email)
        self._check_password(password)
        if individual_id is not None:
            individual_id = self._require_individual(individual_id)
        if self.users.get_by_email(email) is not None:
            raise DuplicateEmailError(f"An account already exists for {email}")

        try:
            with self.transaction():
                user = self.users.create(
                    email=email,
                    password=generate_password_hash(password),
                    individual_id=individual_id,
                    email_confirm_code=generate_token(),
                    email_confirm=False,
                    login_count=0,
                    profile_complete=False,
                )
        except IntegrityError as e:
            raise DuplicateEmailError(f"An account already exists for {email}") from e

        logger.info(f"Registered account {email}")
        return user

    @handle_service_exceptions(logger)
    def get_user(self, email: str) -> User:
        email = normalize_email(email)
        user = self.users.get_by_email(email)
        if user is None:
            raise NotFoundError(f"No account for {email}")
        return user

    @handle_service_exceptions(logger)
    def link_individual(self, email: str, individual_id) -> User:
        """Point the account at its owner's genealogical profile"""
        user = self.get_user(email)
        individual_id = self._require_individual(individual_id)
        with self.transaction():
            self.users.update(user, individual_id=individual_id)
        return user

    @handle_service_exceptions(logger)
    def mark_profile_complete(self, email: str) -> User:
        user = self.get_user(email)
        with self.transaction():
            self.users.update(user, profile_complete=True)
        return user

    # Login throttling

    @handle_service_exceptions(logger)
    def login(self, email: str, password: str) -> User:
        """
        Check credentials under the login throttle

        Raises:
            LoginCooldownError: the account is locked, whatever the password
            AuthenticationError: unknown email or wrong password
        """
        now = self.clock()
        try:
            email = normalize_email(email)
        except ValidationError as e:
            raise AuthenticationError("Invalid email or password") from e

        user = self.users.get_by_email(email)
        if user is None:
            logger.warning("Login attempt for unknown account")
            raise AuthenticationError("Invalid email or password")

        if user.is_cooling_down(now):
            retry_after = user.cooldown - now
            logger.warning(f"Login for {email} refused, cooling down for {retry_after}s")
            raise LoginCooldownError(
                f"Too many failed login attempts; try again in {retry_after} seconds",
                retry_after=retry_after,
            )

        authenticated = (isinstance(password, str) and bool(password)
                         and check_password_hash(user.password, password))

        with self.transaction():
            if user.cooldown is not None:
                # Cooldown has elapsed, start over
                self.users.update(user, cooldown=None, login_count=0, first_failed_login=None)
            if authenticated:
                self.users.update(user, login_count=0, first_failed_login=None, timestamp=now)
            else:
                self._record_failed_login(user, now)

        if not authenticated:
            logger.warning(f"Failed login for {email} ({user.login_count}/{self.max_login_attempts})")
            raise AuthenticationError("Invalid email or password")

        logger.info(f"Login for {email}")
        return user

    def _record_failed_login(self, user: User, now: int) -> None:
        in_window = (
            user.first_failed_login is not None
            and now - user.first_failed_login < self.cooldown_seconds
        )
        if in_window:
            count = (user.login_count or 0) + 1
            window_start = user.first_failed_login
        else:
            count = 1
            window_start = now

        cooldown = now + self.cooldown_seconds if count >= self.max_login_attempts else None
        self.users.update(user, login_count=count, first_failed_login=window_start, cooldown=cooldown)
        if cooldown is not None:
            logger.warning(f"Account {user.email} locked until {cooldown}")

    # Email confirmation

    @handle_service_exceptions(logger)
    def confirm_email(self, email: str, code: str) -> User:
        """Confirm the address; a wrong code changes nothing"""
        user = self.get_user(email)
        if user.email_state is EmailConfirmation.CONFIRMED:
            raise ConflictError(f"Email {user.email} is already confirmed")
        if not _tokens_match(user.email_confirm_code, code):
            raise InvalidTokenError("Invalid email confirmation code")

        with self.transaction():
            self.users.update(user, email_confirm_code=None, email_confirm=True)
        logger.info(f"Confirmed email {user.email}")
        return user

    @handle_service_exceptions(logger)
    def reissue_confirmation_code(self, email: str) -> User:
        user = self.get_user(email)
        if user.email_state is EmailConfirmation.CONFIRMED:
            raise ConflictError(f"Email {user.email} is already confirmed")
        with self.transaction():
            self.users.update(user, email_confirm_code=generate_token())
        return user

    # Password reset

    @handle_service_exceptions(logger)
    def request_password_reset(self, email: str) -> str:
        """Issue a reset token, replacing any pending one, and return it"""
        user = self.get_user(email)
        token = generate_token()
        with self.transaction():
            self.users.update(user, password_reset=token, password_reset_issued=self.clock())
        logger.info(f"Password reset requested for {user.email}")
        return token

    @handle_service_exceptions(logger)
    def password_reset_state(self, email: str) -> PasswordResetState:
        user = self.get_user(email)
        return user.password_reset_state(self.clock(), self.reset_ttl_seconds)

    @handle_service_exceptions(logger)
    def redeem_password_reset(self, email: str, token: str, new_password: str) -> User:
        """
        Set a new password with a pending reset token

        A successful reset also lifts any login cooldown.
        """
        user = self.get_user(email)
        if user.password_reset is None:
            raise InvalidTokenError("No password reset is pending")

        if user.password_reset_state(self.clock(), self.reset_ttl_seconds) is PasswordResetState.NONE:
            with self.transaction():
                self.users.update(user, password_reset=None, password_reset_issued=None)
            raise ExpiredTokenError("Password reset token has expired")

        if not _tokens_match(user.password_reset, token):
            raise InvalidTokenError("Invalid password reset token")
        self._check_password(new_password)

        with self.transaction():
            self.users.update(
                user,
                password=generate_password_hash(new_password),
                password_reset=None,
                password_reset_issued=None,
                login_count=0,
                first_failed_login=None,
                cooldown=None,
            )
        logger.info(f"Password reset for {user.email}")
        return user

    # Helpers

    def _check_password(self, password: str | None) -> None:
        if not password or not isinstance(password, str):
            raise ValidationError("Missing required fields: password")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    def _require_individual(self, individual_id) -> int:
        parsed = parse_id(individual_id, 'individual_id')
        if not self.individuals.exists(parsed):
            raise MissingReferenceError(f"Individual {individual_id} does not exist")
        return parsed
