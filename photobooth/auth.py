import logging

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from .database import get_db
from .identity import IdentityClient, get_identity_client
from .models import UserProfile
from .shared.errors import PermissionDeniedError

logger = logging.getLogger(__name__)

security = HTTPBearer()


async def get_current_staff(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db),
    identity: IdentityClient = Depends(get_identity_client),
) -> UserProfile:
    """
    Resolve the bearer token to a back-office profile.
    Sessions are issued by the hosted auth API; only admin profiles get through.
    """
    user = await identity.get_user(credentials.credentials)
    user_id = user.get("id")

    profile = db.query(UserProfile).filter(UserProfile.id == user_id).first()
    if not profile or profile.role != "admin":
        logger.warning(f"Back-office access denied for user {user_id}")
        raise PermissionDeniedError()

    return profile
