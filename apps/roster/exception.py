from fastapi import HTTPException, status


def http_not_found(detail: str = "Not found") -> HTTPException:
    """
    404 Not Found response shortcut.
    """
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


def http_unauthorized(detail: str = "Authentication required") -> HTTPException:
    """
    401 Unauthorized response shortcut.
    """
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def http_forbidden(detail: str = "Not allowed") -> HTTPException:
    """
    403 Forbidden response shortcut.
    """
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)
