# app/auth.py
import hmac
from typing import Optional, Protocol

from fastapi import Request

from .errors import AuthError

API_KEY_HEADER = "x-api-key"


class CredentialVerifier(Protocol):
    def verify(self, request: Request) -> bool:
        ...


class StaticApiKeyVerifier:
    """Accepts requests whose x-api-key header equals one configured secret."""

    def __init__(self, api_key: str, header: str = API_KEY_HEADER):
        self.api_key = api_key
        self.header = header

    def verify(self, request: Request) -> bool:
        supplied: Optional[str] = request.headers.get(self.header)
        if not supplied:
            return False
        return hmac.compare_digest(supplied.encode(), self.api_key.encode())


async def require_credentials(request: Request) -> None:
    verifier: CredentialVerifier = request.app.state.verifier
    if not verifier.verify(request):
        raise AuthError("Invalid or missing API key")
