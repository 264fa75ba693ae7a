"""Request body validation decorator.

@validate_request turns a view function's signature into its input
contract:

    @todos_bp.patch("/<todo_id>")
    @validate_request
    def update_todo(todo_id: str, data: TodoUpdate):
        ...

Parameters filled by the URL rule (Flask view_args) pass through untouched.
Every other parameter must be annotated with a Pydantic BaseModel subclass
and is parsed from the JSON body (or form data). Parse failures raise
ValidationError, which main.py renders as a 400.
"""

import inspect
import logging
import typing
from functools import wraps

from flask import request
from pydantic import BaseModel, ValidationError as PydanticValidationError

from ..exceptions import ValidationError

logger = logging.getLogger(__name__)

# Body keys never echoed back in error details
SENSITIVE_FIELDS = {"password"}


def _get_request_data() -> typing.Any:
    """Read the request body as JSON, falling back to form data."""
    data = request.get_json(silent=True)
    if data is None and request.form:
        data = request.form.to_dict()
    return data if data is not None else {}


def _redact(data: typing.Any) -> typing.Any:
    """Mask sensitive values in a request body before it is echoed."""
    if not isinstance(data, dict):
        return data
    return {
        key: "***" if key in SENSITIVE_FIELDS else value
        for key, value in data.items()
    }


def _format_errors(error: PydanticValidationError) -> list[dict]:
    return [
        {
            "field": ".".join(str(part) for part in err["loc"]),
            "message": err["msg"],
            "expected_type": err["type"],
        }
        for err in error.errors()
    ]


def validate_request(f):
    """
    Validate the request body against the view's BaseModel parameters.

    Raises:
        TypeError: At decoration time if the function has no parameters or a
            parameter lacks a type annotation; at request time if a body
            parameter is not annotated with a BaseModel subclass.
        ValidationError: At request time if the body does not match the model.
    """
    parameters = list(inspect.signature(f).parameters.values())
    if not parameters:
        raise TypeError(f"{f.__name__} has no parameters to validate")

    for param in parameters:
        if param.annotation is inspect.Parameter.empty:
            raise TypeError(
                f"Parameter '{param.name}' of {f.__name__} lacks a type annotation"
            )

    @wraps(f)
    def wrapper(*args, **kwargs):
        hints = typing.get_type_hints(f)
        view_args = request.view_args or {}

        for param in parameters:
            if param.name in kwargs or param.name in view_args:
                continue

            model = hints.get(param.name)
            if not (inspect.isclass(model) and issubclass(model, BaseModel)):
                raise TypeError(
                    f"Parameter '{param.name}' of {f.__name__} must be annotated "
                    f"with a Pydantic BaseModel subclass"
                )

            data = _get_request_data()
            try:
                kwargs[param.name] = model.model_validate(data)
            except PydanticValidationError as e:
                errors = _format_errors(e)
                logger.debug(f"Request validation failed for {model.__name__}: {errors}")
                raise ValidationError(
                    "Invalid request data",
                    {
                        "model": model.__name__,
                        "received": _redact(data),
                        "errors": errors,
                    }
                )

        return f(*args, **kwargs)

    return wrapper
