"""
Tests for AccountService: registration, login throttling, email confirmation and password reset
"""

import pytest
from werkzeug.security import check_password_hash

from roots_app.database.models import EmailConfirmation, PasswordResetState
from roots_app.services.account_service import AccountService, generate_token, normalize_email
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
)


EMAIL = 'archivist@example.org'
PASSWORD = 'correct horse battery'


@pytest.fixture
def service(db, clock):
    return AccountService(max_login_attempts=3, cooldown_seconds=900, reset_ttl_seconds=3600, clock=clock)


@pytest.fixture
def user(service):
    return service.register(EMAIL, PASSWORD)


class TestHelpers:
    def test_generate_token_width(self):
        token = generate_token()
        assert len(token) == 32
        assert token != generate_token()

    def test_normalize_email(self):
        assert normalize_email('  Archivist@Example.ORG ') == 'archivist@example.org'

    @pytest.mark.parametrize('bad', ['', None, 'no-at-sign', '@example.org', 'user@'])
    def test_normalize_email_rejects(self, bad):
        with pytest.raises(ValidationError):
            normalize_email(bad)

    def test_max_login_attempts_must_be_positive(self, db):
        with pytest.raises(ValueError):
            AccountService(max_login_attempts=0)

    def test_from_config(self, app, db):
        service = AccountService.from_config(app.config)
        assert service.max_login_attempts == 3
        assert service.cooldown_seconds == 900
        assert service.reset_ttl_seconds == 3600


class TestRegistration:
    """Test account creation"""

    def test_register_stores_hash_and_confirmation_code(self, user):
        assert user.email == EMAIL
        assert user.password != PASSWORD
        assert check_password_hash(user.password, PASSWORD)
        assert len(user.email_confirm_code) == 32
        assert user.email_state is EmailConfirmation.UNCONFIRMED
        assert user.login_count == 0
        assert user.profile_complete is False

    def test_duplicate_email_rejected(self, service, user):
        with pytest.raises(DuplicateEmailError):
            service.register(EMAIL.upper(), 'another password')

    def test_short_password_rejected(self, service):
        with pytest.raises(ValidationError, match="at least 8 characters"):
            service.register(EMAIL, 'short')

    def test_register_linked_to_individual(self, service, make_individual):
        individual = make_individual()
        user = service.register(EMAIL, PASSWORD, individual_id=individual.id)
        assert user.individual_id == individual.id

    def test_register_with_unknown_individual(self, service):
        with pytest.raises(MissingReferenceError):
            service.register(EMAIL, PASSWORD, individual_id=9999)

    def test_link_individual_and_complete_profile(self, service, user, make_individual):
        individual = make_individual()

        service.link_individual(EMAIL, individual.id)
        updated = service.mark_profile_complete(EMAIL)

        assert updated.individual_id == individual.id
        assert updated.profile_complete is True

    def test_get_unknown_user(self, service):
        with pytest.raises(NotFoundError):
            service.get_user('nobody@example.org')


class TestLoginThrottle:
    """Test failed-login counting and cooldown"""

    def test_successful_login_records_timestamp(self, service, user, clock):
        logged_in = service.login(EMAIL, PASSWORD)

        assert logged_in.timestamp == clock.now
        assert logged_in.login_count == 0

    def test_login_is_case_insensitive_on_email(self, service, user):
        assert service.login('ARCHIVIST@example.org', PASSWORD).email == EMAIL

    def test_wrong_password(self, service, user):
        with pytest.raises(AuthenticationError, match="Invalid email or password"):
            service.login(EMAIL, 'wrong password')
        assert service.get_user(EMAIL).login_count == 1

    @pytest.mark.parametrize('password', [12345678, None, ['correct'], ''])
    def test_non_string_password_counts_as_failure(self, service, user, password):
        with pytest.raises(AuthenticationError, match="Invalid email or password"):
            service.login(EMAIL, password)
        assert service.get_user(EMAIL).login_count == 1

    def test_unknown_email(self, service):
        with pytest.raises(AuthenticationError) as exc_info:
            service.login('nobody@example.org', PASSWORD)
        assert not isinstance(exc_info.value, LoginCooldownError)

    def test_cooldown_after_max_failures_blocks_correct_password(self, service, user, clock):
        for _ in range(3):
            with pytest.raises(AuthenticationError):
                service.login(EMAIL, 'wrong password')

        locked = service.get_user(EMAIL)
        assert locked.cooldown == clock.now + 900

        clock.advance(60)
        with pytest.raises(LoginCooldownError) as exc_info:
            service.login(EMAIL, PASSWORD)
        assert exc_info.value.retry_after == 840

    def test_rejected_attempts_do_not_extend_cooldown(self, service, user, clock):
        for _ in range(3):
            with pytest.raises(AuthenticationError):
                service.login(EMAIL, 'wrong password')
        cooldown = service.get_user(EMAIL).cooldown

        clock.advance(10)
        with pytest.raises(LoginCooldownError):
            service.login(EMAIL, 'wrong password')
        assert service.get_user(EMAIL).cooldown == cooldown

    def test_login_allowed_after_cooldown(self, service, user, clock):
        for _ in range(3):
            with pytest.raises(AuthenticationError):
                service.login(EMAIL, 'wrong password')

        clock.advance(900)
        logged_in = service.login(EMAIL, PASSWORD)

        assert logged_in.cooldown is None
        assert logged_in.login_count == 0
        assert logged_in.first_failed_login is None

    def test_success_resets_failure_count(self, service, user):
        for _ in range(2):
            with pytest.raises(AuthenticationError):
                service.login(EMAIL, 'wrong password')

        service.login(EMAIL, PASSWORD)

        with pytest.raises(AuthenticationError) as exc_info:
            service.login(EMAIL, 'wrong password')
        assert not isinstance(exc_info.value, LoginCooldownError)
        assert service.get_user(EMAIL).login_count == 1

    def test_failures_outside_window_start_a_new_count(self, service, user, clock):
        for _ in range(2):
            with pytest.raises(AuthenticationError):
                service.login(EMAIL, 'wrong password')

        clock.advance(901)
        with pytest.raises(AuthenticationError):
            service.login(EMAIL, 'wrong password')

        refreshed = service.get_user(EMAIL)
        assert refreshed.login_count == 1
        assert refreshed.cooldown is None
        assert service.login(EMAIL, PASSWORD).email == EMAIL


class TestEmailConfirmation:
    """Test unconfirmed -> confirmed"""

    def test_confirm_with_correct_code(self, service, user):
        confirmed = service.confirm_email(EMAIL, user.email_confirm_code)

        assert confirmed.email_confirm is True
        assert confirmed.email_confirm_code is None
        assert confirmed.email_state is EmailConfirmation.CONFIRMED

    def test_wrong_code_leaves_state_unchanged(self, service, user):
        code = user.email_confirm_code

        with pytest.raises(InvalidTokenError):
            service.confirm_email(EMAIL, 'f' * 32)

        unchanged = service.get_user(EMAIL)
        assert unchanged.email_confirm is False
        assert unchanged.email_confirm_code == code

    @pytest.mark.parametrize('code', ['código', 'ü' * 32, 12345])
    def test_non_ascii_or_non_string_code_is_invalid(self, service, user, code):
        with pytest.raises(InvalidTokenError):
            service.confirm_email(EMAIL, code)
        assert service.get_user(EMAIL).email_confirm is False

    def test_confirm_twice_conflicts(self, service, user):
        service.confirm_email(EMAIL, user.email_confirm_code)
        with pytest.raises(ConflictError):
            service.confirm_email(EMAIL, 'anything')

    def test_reissue_replaces_code(self, service, user):
        old_code = user.email_confirm_code

        new_code = service.reissue_confirmation_code(EMAIL).email_confirm_code

        assert new_code != old_code
        with pytest.raises(InvalidTokenError):
            service.confirm_email(EMAIL, old_code)
        assert service.confirm_email(EMAIL, new_code).email_confirm is True


class TestPasswordReset:
    """Test none -> pending -> none"""

    def test_state_pending_after_request(self, service, user):
        assert service.password_reset_state(EMAIL) is PasswordResetState.NONE
        token = service.request_password_reset(EMAIL)

        assert len(token) == 32
        assert service.password_reset_state(EMAIL) is PasswordResetState.PENDING

    def test_redeem_sets_new_password(self, service, user):
        token = service.request_password_reset(EMAIL)

        service.redeem_password_reset(EMAIL, token, 'a brand new password')

        assert service.password_reset_state(EMAIL) is PasswordResetState.NONE
        assert service.login(EMAIL, 'a brand new password').email == EMAIL
        with pytest.raises(AuthenticationError):
            service.login(EMAIL, PASSWORD)

    def test_redeem_wrong_token(self, service, user):
        service.request_password_reset(EMAIL)

        with pytest.raises(InvalidTokenError):
            service.redeem_password_reset(EMAIL, '0' * 32, 'a brand new password')
        assert service.password_reset_state(EMAIL) is PasswordResetState.PENDING

    def test_redeem_non_ascii_token(self, service, user):
        service.request_password_reset(EMAIL)

        with pytest.raises(InvalidTokenError, match="Invalid password reset token"):
            service.redeem_password_reset(EMAIL, 'ñ' * 32, 'a brand new password')
        assert service.password_reset_state(EMAIL) is PasswordResetState.PENDING

    def test_redeem_without_request(self, service, user):
        with pytest.raises(InvalidTokenError, match="No password reset is pending"):
            service.redeem_password_reset(EMAIL, '0' * 32, 'a brand new password')

    def test_expired_token_is_cleared(self, service, user, clock):
        token = service.request_password_reset(EMAIL)
        clock.advance(3600)

        assert service.password_reset_state(EMAIL) is PasswordResetState.NONE
        with pytest.raises(ExpiredTokenError):
            service.redeem_password_reset(EMAIL, token, 'a brand new password')
        assert service.get_user(EMAIL).password_reset is None

    def test_new_request_replaces_pending_token(self, service, user):
        first = service.request_password_reset(EMAIL)
        second = service.request_password_reset(EMAIL)

        with pytest.raises(InvalidTokenError):
            service.redeem_password_reset(EMAIL, first, 'a brand new password')
        service.redeem_password_reset(EMAIL, second, 'a brand new password')

    def test_reset_lifts_cooldown(self, service, user):
        for _ in range(3):
            with pytest.raises(AuthenticationError):
                service.login(EMAIL, 'wrong password')

        token = service.request_password_reset(EMAIL)
        service.redeem_password_reset(EMAIL, token, 'a brand new password')

        assert service.login(EMAIL, 'a brand new password').cooldown is None

    def test_reset_for_unknown_account(self, service):
        with pytest.raises(NotFoundError):
            service.request_password_reset('nobody@example.org')
