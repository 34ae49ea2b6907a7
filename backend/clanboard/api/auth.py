"""Bearer token verification for authenticated endpoints."""

import logging
from abc import ABC, abstractmethod

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel, ConfigDict

from clanboard.config import AuthConfig
from clanboard.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


class Principal(BaseModel):
    """The authenticated caller."""

    model_config = ConfigDict(frozen=True)

    uid: str
    email: str | None = None


class TokenVerifier(ABC):
    """Turns a bearer token into a principal or raises AuthenticationError."""

    @abstractmethod
    def verify(self, token: str) -> Principal:
        ...


class JwtVerifier(TokenVerifier):
    """Verifies signed JWTs with a shared secret."""

    def __init__(self, config: AuthConfig):
        self.secret = config.jwt_secret
        self.algorithm = config.jwt_algorithm
        self.audience = config.jwt_audience

    def verify(self, token: str) -> Principal:
        if not self.secret:
            raise AuthenticationError("Token verification is not configured")

        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                audience=self.audience,
                options={"verify_aud": self.audience is not None},
            )
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Token expired") from None
        except jwt.InvalidTokenError as e:
            logger.debug(f"Rejected bearer token: {e}")
            raise AuthenticationError("Invalid token") from None

        uid = payload.get("sub") or payload.get("uid")
        if not uid:
            raise AuthenticationError("Token has no subject")

        return Principal(uid=str(uid), email=payload.get("email"))


def get_principal(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> Principal:
    """FastAPI dependency yielding the authenticated caller."""
    if credentials is None:
        raise AuthenticationError("Not authenticated")

    verifier: TokenVerifier = request.app.state.verifier
    return verifier.verify(credentials.credentials)
