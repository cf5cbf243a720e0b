"""
JSON envelopes shared by the Roots API blueprints

Every body carries ``success``; successful bodies add ``message`` and their
payload keys, failed bodies add ``error`` and optional ``details``.
"""

from typing import Any

from flask import jsonify


class APIResponseFormatter:
    """Build (response, status) pairs for blueprints and error handlers"""

    @staticmethod
    def _respond(body: dict, status_code: int) -> tuple:
        return jsonify(body), status_code

    @staticmethod
    def success(data: Any = None, message: str = "", status_code: int = 200) -> tuple:
        """
        Dict payloads are merged into the envelope, e.g. {'individual': {...}};
        anything else is placed under 'data'
        """
        body = {'success': True, 'message': message}
        if isinstance(data, dict):
            body.update(data)
        elif data is not None:
            body['data'] = data
        return APIResponseFormatter._respond(body, status_code)

    @staticmethod
    def created(data: Any = None, message: str = "") -> tuple:
        return APIResponseFormatter.success(data, message, status_code=201)

    @staticmethod
    def error(error_message: str, status_code: int = 400, details: dict | None = None) -> tuple:
        body = {'success': False, 'error': error_message}
        if details:
            body['details'] = details
        return APIResponseFormatter._respond(body, status_code)

    @staticmethod
    def service_error(error: Exception, status_code: int, message: str | None = None) -> tuple:
        """
        Report a service exception by class name

        Errors with a ``retry_after`` (login cooldown) also set the Retry-After header.
        """
        response, status_code = APIResponseFormatter.error(
            message or str(error), status_code, {'type': error.__class__.__name__}
        )
        retry_after = getattr(error, 'retry_after', None)
        if retry_after is not None:
            response.headers['Retry-After'] = str(retry_after)
        return response, status_code
