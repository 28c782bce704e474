from fastapi import Request, HTTPException, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.security import decode_user_id
from app.database import get_db
from app.services.event_store import EventStore, SqlEventStore


def _read_token(request: Request) -> str | None:
    token = request.cookies.get("access_token")
    if token:
        return token
    scheme, _, credentials = request.headers.get("Authorization", "").partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials
    return None


async def get_current_user_id(request: Request) -> str:
    """Opaque user id (the token's `sub`) issued by the identity provider."""
    token = _read_token(request)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated"
        )

    user_id = decode_user_id(token)
    if user_id is None:
        raise HTTPException(status_code=401, detail="Token expired or invalid")
    return user_id


async def get_event_store(db: AsyncSession = Depends(get_db)) -> EventStore:
    return SqlEventStore(db)
