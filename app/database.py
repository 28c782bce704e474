import os
from dotenv import load_dotenv
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import DeclarativeBase

load_dotenv()


DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./ecosort.db")
SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() in ("1", "true", "yes")

engine_options = {"echo": SQL_ECHO}
if DATABASE_URL.startswith("postgresql"):
    engine_options.update(
        pool_pre_ping=True,  # verify connections are alive before using them
        pool_size=10,
        max_overflow=20,
    )

engine = create_async_engine(DATABASE_URL, **engine_options)
AsyncSessionLocal = async_sessionmaker(
    bind=engine, class_=AsyncSession, expire_on_commit=False
)


class Base(DeclarativeBase):
    pass


async def get_db():
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


async def init_models():
    """Create tables for local SQLite databases. PostgreSQL schemas are managed by Alembic."""
    if not DATABASE_URL.startswith("sqlite"):
        return
    import app.models.db.WasteScan  # noqa: F401  registers the table on Base.metadata

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
