from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from cafedocs.core.config import settings

# Declarative base for all models
Base = declarative_base()

# Async engine
engine = create_async_engine(settings.database_url, future=True, echo=settings.db_echo)

# Sessions
SessionLocal = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


# Dependency for FastAPI
async def get_db():
    async with SessionLocal() as session:
        yield session


async def init_db(bind: AsyncEngine = engine) -> None:
    """Create all tables that do not exist yet"""
    # Register models on the metadata
    import cafedocs.db.models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
