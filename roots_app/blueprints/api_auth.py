"""
Authentication API blueprint backed by User accounts
"""

from flask import Blueprint, current_app, session

from roots_app.blueprints.blueprint_utils import get_json_body
from roots_app.services.account_service import AccountService
from roots_app.services.exceptions import NotFoundError
from roots_app.shared.api_response_formatter import APIResponseFormatter
from roots_app.shared.logging_config import get_project_logger
from roots_app.shared.serializers import user_to_dict


logger = get_project_logger(__name__)

api_auth = Blueprint('api_auth', __name__, url_prefix='/api/auth')


def _account_service() -> AccountService:
    return AccountService.from_config(current_app.config)


def _expose_tokens() -> bool:
    """Tokens go out by mail in production; echo them only when configured to"""
    return bool(current_app.config.get('RETURN_ACCOUNT_TOKENS'))


@api_auth.route('/register', methods=['POST'])
def register():
    data = get_json_body()
    user = _account_service().register(
        data.get('email'), data.get('password'), individual_id=data.get('individual_id')
    )
    payload = {'user': user_to_dict(user)}
    if _expose_tokens():
        payload['email_confirm_code'] = user.email_confirm_code
    return APIResponseFormatter.created(payload, message='Account registered; confirm the email address')


@api_auth.route('/login', methods=['POST'])
def login():
    data = get_json_body()
    user = _account_service().login(data.get('email'), data.get('password'))
    session['user_email'] = user.email
    return APIResponseFormatter.success({'user': user_to_dict(user)}, message='Logged in')


@api_auth.route('/logout', methods=['POST'])
def logout():
    session.pop('user_email', None)
    return APIResponseFormatter.success(message='Logged out')


@api_auth.route('/confirm', methods=['POST'])
def confirm_email():
    data = get_json_body()
    user = _account_service().confirm_email(data.get('email'), data.get('code'))
    return APIResponseFormatter.success({'user': user_to_dict(user)}, message='Email confirmed')


@api_auth.route('/password-reset', methods=['POST'])
def request_password_reset():
    """Issue a reset token; the response does not reveal whether the account exists"""
    data = get_json_body()
    payload = {}
    try:
        token = _account_service().request_password_reset(data.get('email'))
        if _expose_tokens():
            payload['password_reset'] = token
    except NotFoundError:
        logger.info("Password reset requested for unknown account")
    return APIResponseFormatter.success(payload, message='If the account exists, a reset token has been issued')


@api_auth.route('/password-reset/redeem', methods=['POST'])
def redeem_password_reset():
    data = get_json_body()
    user = _account_service().redeem_password_reset(
        data.get('email'), data.get('token'), data.get('new_password')
    )
    return APIResponseFormatter.success({'user': user_to_dict(user)}, message='Password updated')
