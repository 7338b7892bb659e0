from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError

from common.jwt import verify_token

# Tokens are issued by the host platform; the tokenUrl only feeds the interactive docs.
# auto_error=False so anonymous visitors reach the roster route and get the login outcome.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token", auto_error=False)


async def get_acting_identity_id(token: Optional[str] = Depends(oauth2_scheme)) -> Optional[int]:
    """
    Dependency resolving the acting identity from the bearer access token.
    Returns None when no token is sent; a token that fails verification is a 401.
    """
    if not token:
        return None

    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = verify_token(token, expected_token_type="access")
        subject = payload.get("sub")
        if subject is None:
            raise credentials_exception
        return int(subject)
    except (JWTError, ValueError):
        raise credentials_exception
