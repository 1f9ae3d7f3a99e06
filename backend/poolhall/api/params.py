"""Request body parsing shared by the blueprints.

Clients send either JSON or form-encoded bodies; form values arrive as
strings, so integer fields are converted here.
"""
from flask import request

from poolhall.errors import InvalidInput


def payload():
    data = request.get_json(silent=True)
    if data is None:
        data = request.form.to_dict()
    if not isinstance(data, dict):
        raise InvalidInput('Request body must be a JSON object')
    return data


def int_field(data, name, default=None, minimum=0):
    value = data.get(name, default)
    if value is None or value == '':
        raise InvalidInput(f"{name} is required")
    if isinstance(value, bool):
        raise InvalidInput(f"{name} must be an integer")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise InvalidInput(f"{name} must be an integer") from None
    if number < minimum:
        raise InvalidInput(f"{name} must be at least {minimum}")
    return number


def str_field(data, name):
    value = data.get(name)
    if not isinstance(value, str) or not value:
        raise InvalidInput(f"{name} is required")
    return value


def optional_str_field(data, name):
    value = data.get(name)
    if value is not None and not isinstance(value, str):
        raise InvalidInput(f"{name} must be a string")
    return value
