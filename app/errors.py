# app/errors.py
from typing import Any, Dict


class ApiError(Exception):
    """Base class for errors that map onto the JSON error envelope."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def name(self) -> str:
        return type(self).__name__

    def to_dict(self) -> Dict[str, Any]:
        return {"error": {"name": self.name, "message": self.message, "status": self.status_code}}


class AuthError(ApiError):
    status_code = 401


class ValidationError(ApiError):
    status_code = 400


class NotFoundError(ApiError):
    status_code = 404


class MalformedRequestError(ApiError):
    """Request body is not a JSON object."""

    status_code = 400
