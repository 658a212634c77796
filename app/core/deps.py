from fastapi import Depends, HTTPException
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from app.core.config import settings
from app.core.security import decode_jwt

bearer = HTTPBearer(auto_error=False)

def get_current_admin(creds: HTTPAuthorizationCredentials = Depends(bearer)) -> dict:
    if not creds:
        raise HTTPException(status_code=401, detail="Not authorized to access this route")
    try:
        return decode_jwt(creds.credentials, settings.ADMIN_JWT_SECRET)
    except JWTError:
        raise HTTPException(status_code=401, detail="Not authorized to access this route")

def get_optional_admin(creds: HTTPAuthorizationCredentials = Depends(bearer)) -> dict | None:
    """Claims of a valid bearer token, or None for anonymous callers.

    Public list endpoints widen visibility for admins but never reject a bad token.
    """
    if not creds:
        return None
    try:
        return decode_jwt(creds.credentials, settings.ADMIN_JWT_SECRET)
    except JWTError:
        return None
