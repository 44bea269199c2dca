from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from costume_rental.core.config import settings


def async_database_url(url: str) -> str:
    """Map plain driver URLs onto their async drivers."""
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+asyncpg://", 1)
    if url.startswith("sqlite://"):
        return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return url


async_engine = create_async_engine(async_database_url(settings.DATABASE_URL))
AsyncSessionLocal = async_sessionmaker(
    async_engine, class_=AsyncSession, expire_on_commit=False
)


async def get_db():
    async with AsyncSessionLocal() as session:
        yield session
