"""
Request helpers shared by the API blueprints
"""

from flask import request

from roots_app.services.exceptions import ValidationError


TRUE_VALUES = ('1', 'true', 'yes', 'on')


def get_json_body() -> dict:
    """The request's JSON object, or a ValidationError when there is none"""
    data = request.get_json(silent=True)
    if not data or not isinstance(data, dict):
        raise ValidationError('No data provided')
    return data


def bool_arg(name: str, default: bool = False) -> bool:
    value = request.args.get(name)
    if value is None:
        return default
    return value.strip().lower() in TRUE_VALUES
