"""Bearer-token dependencies resolving the signed-in Supabase user."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.exceptions import AuthenticationError, ErrorCode
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser

bearer_scheme = HTTPBearer(auto_error=False)

Credentials = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]

_auth_provider: JWTAuthProvider | None = None


def get_auth_provider() -> JWTAuthProvider:
    """Return the process-wide token validator, creating it on first use."""
    global _auth_provider
    if _auth_provider is None:
        _auth_provider = JWTAuthProvider()
    return _auth_provider


async def get_optional_user(
    credentials: Credentials,
    auth_provider: JWTAuthProvider = Depends(get_auth_provider),
) -> TokenUser | None:
    """Resolve the caller, or None when the token is absent or unusable.

    Group creation relies on this so that the service can report a missing
    user in its own words.
    """
    if credentials is None:
        return None
    return await auth_provider.validate_token(credentials.credentials)


async def get_current_user(
    credentials: Credentials,
    auth_provider: JWTAuthProvider = Depends(get_auth_provider),
) -> TokenUser:
    """Resolve the caller or reject the request with 401.

    Raises:
        AuthenticationError: UNAUTHORIZED without a token, INVALID_TOKEN
            when the token does not validate.
    """
    if credentials is None:
        raise AuthenticationError()

    user = await auth_provider.validate_token(credentials.credentials)
    if user is None:
        raise AuthenticationError(
            message="Session expired, sign in again",
            error_code=ErrorCode.INVALID_TOKEN,
        )
    return user


CurrentUser = Annotated[TokenUser, Depends(get_current_user)]
OptionalUser = Annotated[TokenUser | None, Depends(get_optional_user)]
