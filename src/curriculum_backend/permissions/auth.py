"""
Identity context: resolves the caller of a request into a Principal.

A request without an Authorization header resolves to the anonymous
principal; this never raises. Credentials that are present but wrong
are rejected with 401.
"""

import base64
import binascii
import logging
import secrets
from typing import Annotated, List, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBasicCredentials
from fastapi.security.utils import get_authorization_scheme_param
from sqlalchemy.orm import Session

from curriculum_backend.api.exceptions import BasicAuthException, UnauthorizedException
from curriculum_backend.database import get_db
from curriculum_backend.interface.tokens import decrypt_password
from curriculum_backend.permissions.principal import Principal
from curriculum_backend.repositories.user import UserRepository

logger = logging.getLogger(__name__)


class AuthenticationResult:
    """Result of authentication containing user info and roles"""

    def __init__(self, user_id: int, login: str, role_ids: List[str], provider: str = "unknown"):
        self.user_id = user_id
        self.login = login
        self.role_ids = role_ids
        self.provider = provider


class AuthenticationService:
    """Service for handling different authentication methods"""

    @staticmethod
    def authenticate_basic(username: str, password: str, db: Session) -> AuthenticationResult:
        """Authenticate using basic auth credentials"""

        user = UserRepository(db).find_by_login(username)

        if user is None or not user.activated or user.password is None:
            raise BasicAuthException()

        try:
            stored_password = decrypt_password(user.password)
        except Exception:
            logger.error(f"Stored password for {username} could not be decrypted", exc_info=True)
            raise BasicAuthException()

        if not secrets.compare_digest(password, stored_password):
            raise BasicAuthException()

        return AuthenticationResult(user.id, user.login, user.role_ids, "basic")


class PrincipalBuilder:
    """Builder for creating Principal objects"""

    @staticmethod
    def build(auth_result: AuthenticationResult) -> Principal:
        return Principal(
            user_id=auth_result.user_id,
            login=auth_result.login,
            roles=auth_result.role_ids,
        )


def parse_authorization_header(request: Request) -> Optional[HTTPBasicCredentials]:
    """Parse authorization header; None when the request is unauthenticated"""

    authorization = request.headers.get("Authorization")
    if not authorization:
        return None

    scheme, param = get_authorization_scheme_param(authorization)

    if not param:
        raise UnauthorizedException("Invalid authorization format")

    if scheme.lower() == "basic":
        try:
            data = base64.b64decode(param).decode("utf-8")
        except (ValueError, UnicodeDecodeError, binascii.Error):
            logger.warning("Failed to decode Basic auth header")
            raise UnauthorizedException("Invalid Basic auth encoding")

        username, separator, password = data.partition(":")
        if not separator:
            raise UnauthorizedException("Invalid Basic auth format")
        return HTTPBasicCredentials(username=username, password=password)

    raise UnauthorizedException(f"Unsupported auth scheme: {scheme}")


async def get_current_principal(
    credentials: Annotated[Optional[HTTPBasicCredentials], Depends(parse_authorization_header)],
    db: Session = Depends(get_db),
) -> Principal:
    """
    Main dependency for getting the current caller.
    Returns the anonymous principal when no credentials were sent.
    """

    if credentials is None:
        return Principal.anonymous()

    auth_result = AuthenticationService.authenticate_basic(
        credentials.username, credentials.password, db
    )
    logger.debug(f"Authenticated {auth_result.login} via {auth_result.provider}")

    return PrincipalBuilder.build(auth_result)


def get_current_login(principal: Principal) -> Optional[str]:
    """Identity context view used by collaborators that only need the login"""
    return principal.get_login() if principal is not None else None
