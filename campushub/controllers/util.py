"""Helpers for request controllers."""

import json
import os
from functools import wraps
from http import HTTPStatus
from typing import Callable, Tuple, Any, Dict

from jsonschema import Draft7Validator
from jsonschema.exceptions import ValidationError as SchemaValidationError
from werkzeug.exceptions import BadRequest

Response = Tuple[Dict[str, Any], HTTPStatus, Dict[str, str]]

SCHEMA_PATH = os.path.join(os.path.dirname(os.path.dirname(__file__)),
                           'schema')


def load_schema(name: str) -> Draft7Validator:
    """Load a JSON Schema document from the ``schema`` directory."""
    with open(os.path.join(SCHEMA_PATH, name)) as f:
        return Draft7Validator(json.load(f))


def validate_request(schema_name: str) -> Callable:
    """
    Generate a controller decorator that validates the request body.

    Parameters
    ----------
    schema_name : str
        File name of the JSON Schema document in ``campushub/schema``.

    Returns
    -------
    decorator
        Decorates a controller function with request body validation against
        the specified JSON Schema. The body must be the first argument.

    """
    validator = load_schema(schema_name)

    def _decorator(func: Callable) -> Callable:
        @wraps(func)
        def _wrpr(data: Any, *args: Any, **kwargs: Any) -> Response:
            try:
                validator.validate(data)
            except SchemaValidationError as e:
                path = '.'.join(str(part) for part in e.absolute_path)
                if path:
                    raise BadRequest(f'Invalid {path}: {e.message}') from e
                raise BadRequest(f'Invalid request: {e.message}') from e
            response: Response = func(data, *args, **kwargs)
            return response
        return _wrpr
    return _decorator
