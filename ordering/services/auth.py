"""Bearer-token identity boundary.

Tokens are issued by the external identity service; this module only
verifies them and turns the claims into an ``AuthUser``.
"""

from dataclasses import dataclass
from typing import Optional

import jwt

from ..errors import AuthenticationError


@dataclass(frozen=True)
class AuthUser:
    id: str
    display_name: str


def bearer_token(header_value: Optional[str]) -> Optional[str]:
    if not header_value:
        return None
    scheme, _, token = header_value.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


class TokenDecoder:
    """Verify HS256 (or configured) JWTs and extract the caller identity."""

    def __init__(self, secret_key: str, algorithm: str = "HS256") -> None:
        self.secret_key = secret_key
        self.algorithm = algorithm

    def decode(self, token: Optional[str]) -> AuthUser:
        if not token:
            raise AuthenticationError("missing token")
        try:
            claims = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"require": ["sub"]},
            )
        except jwt.PyJWTError as exc:
            raise AuthenticationError(str(exc)) from exc

        user_id = str(claims.get("sub") or "").strip()
        name = claims.get("name")
        if not user_id or not isinstance(name, str) or not name.strip():
            raise AuthenticationError("token is missing the sub or name claim")
        return AuthUser(id=user_id, display_name=name)
