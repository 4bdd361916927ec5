"""Bearer access tokens for focuslist sessions.

A token carries the user id in `sub` and expires after
`JWT_EXPIRATION_HOURS`.
"""

import logging
import os
import jwt
from datetime import datetime, timedelta
from typing import Optional, Dict
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "change-me-in-production")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRATION_HOURS = int(os.getenv("JWT_EXPIRATION_HOURS", "24"))


def create_access_token(user_id: str) -> str:
    """Issue a signed session token for `user_id`."""
    issued_at = datetime.utcnow()
    claims = {
        "sub": user_id,
        "iat": issued_at,
        "exp": issued_at + timedelta(hours=JWT_EXPIRATION_HOURS),
    }
    return jwt.encode(claims, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> Optional[Dict]:
    """Verified claims of `token`, or None when it is forged, malformed or expired."""
    try:
        return jwt.decode(token, JWT_SECRET_KEY, algorithms=[JWT_ALGORITHM])
    except jwt.InvalidTokenError as e:
        logger.debug(f"Rejected access token: {type(e).__name__}")
        return None


def get_user_id_from_token(token: str) -> Optional[str]:
    claims = decode_access_token(token)
    return claims.get("sub") if claims else None
