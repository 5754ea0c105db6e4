from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from app.config import settings
from app.schemas.user import User, UserClaims
from app.services.storage import Storage, get_storage
import logging

router = APIRouter(prefix="/api/auth", tags=["Auth"])


def read_claims(request: Request) -> Optional[UserClaims]:
    """Identity forwarded by the authenticating proxy, or None when the request carries none."""
    subject = request.headers.get(settings.AUTH_USER_HEADER)
    if not subject:
        return None
    return UserClaims(
        id=subject,
        email=request.headers.get(settings.AUTH_EMAIL_HEADER),
        first_name=request.headers.get(settings.AUTH_FIRST_NAME_HEADER),
        last_name=request.headers.get(settings.AUTH_LAST_NAME_HEADER),
        profile_image_url=request.headers.get(settings.AUTH_PROFILE_IMAGE_HEADER),
    )


def require_user(request: Request) -> Optional[UserClaims]:
    """Router-level gate: rejects unauthenticated requests before the handler runs."""
    claims = read_claims(request)
    if claims is None and settings.AUTH_ENABLED:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return claims


@router.get("/user", response_model=User)
def get_auth_user(request: Request, storage: Storage = Depends(get_storage)):
    """Current user. The profile is upserted from the forwarded claims, so the first call acts as login."""
    claims = read_claims(request)
    if claims is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    try:
        return storage.upsert_user(claims)
    except Exception:
        logging.exception("Error fetching user")
        return JSONResponse({"message": "Failed to fetch user"}, status_code=500)
