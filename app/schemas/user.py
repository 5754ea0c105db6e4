from datetime import datetime
from typing import Optional
from app.schemas.base import CamelModel


class UserClaims(CamelModel):
    """Identity asserted by the authenticating proxy for the current request."""
    id: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None


class User(UserClaims):
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
