import os
from datetime import datetime, timedelta, timezone
from dotenv import load_dotenv
from jose import jwt, JWTError

load_dotenv()

SECRET_KEY = os.getenv("SECRET_KEY")
ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")

if not SECRET_KEY:
    raise ValueError("SECRET_KEY must be set in the environment")


def create_access_token(subject: str, expires_minutes: int = 30) -> str:
    """Issue a token for `subject`. Used by seed tooling and tests; the identity provider issues real ones."""
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    to_encode = {"sub": subject, "exp": expire}
    return jwt.encode(to_encode, SECRET_KEY or "", algorithm=ALGORITHM)


def decode_user_id(token: str) -> str | None:
    """Return the token's subject, or None when it is expired, forged or has no subject."""
    try:
        payload = jwt.decode(token, SECRET_KEY or "", algorithms=[ALGORITHM])
    except JWTError:
        return None
    return payload.get("sub") or None
