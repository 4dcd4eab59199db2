from collections.abc import AsyncGenerator
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy import text
from sqlmodel import SQLModel
from app.core.exceptions import StorageError
from app.core.logger import logger_manager
from app.core.config.settings import settings


class MySQLManager:
    """Owns the async engine and session factory for the record store."""

    def __init__(self):
        self.logger = logger_manager.get_logger(__name__)
        self.async_engine: AsyncEngine | None = None
        self.async_session_maker: async_sessionmaker | None = None

    def get_sqlalchemy_url(self) -> str:
        """Build the async SQLAlchemy URL, forcing the aiomysql driver for MySQL."""
        url = settings.database.DATABASE_URL
        if url.startswith("mysql://"):
            return url.replace("mysql://", "mysql+aiomysql://", 1)
        elif url.startswith("mysql+pymysql://"):
            return url.replace("mysql+pymysql://", "mysql+aiomysql://", 1)
        return url

    async def initialize(self) -> None:
        """Create the engine and session factory (idempotent)."""
        if self.async_engine:
            self.logger.debug("MySQLManager is already initialized.")
            return

        try:
            db = settings.database
            url = self.get_sqlalchemy_url()
            engine_kwargs = {"echo": db.ECHO, "pool_pre_ping": db.POOL_PRE_PING}
            if url.startswith("mysql"):
                engine_kwargs.update(
                    pool_timeout=db.POOL_TIMEOUT,
                    pool_size=db.POOL_SIZE,
                    max_overflow=db.POOL_MAX_OVERFLOW,
                    # timestamps are stored in UTC
                    connect_args={
                        "init_command": "SET SESSION time_zone = '+00:00'",
                        "connect_timeout": db.POOL_TIMEOUT,
                    },
                )

            self.async_engine = create_async_engine(url, **engine_kwargs)
            self.async_session_maker = async_sessionmaker(
                self.async_engine,
                class_=AsyncSession,
                expire_on_commit=False,
            )
            self.logger.info("✅ Record store engine initialized.")
        except Exception:
            self.logger.exception("❌ Failed to initialize the record store engine.")
            raise

    async def create_tables(self) -> None:
        """Create missing tables for every registered SQLModel table."""
        if not self.async_engine:
            raise RuntimeError("Database not initialized. Call initialize() first.")

        # registers the table models on SQLModel.metadata
        import app.models  # noqa: F401

        async with self.async_engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
        self.logger.info("✅ Record store tables ensured.")

    async def get_db(self) -> AsyncGenerator[AsyncSession, None]:
        """FastAPI dependency yielding one session per request."""
        if not self.async_session_maker:
            raise StorageError("Record store unavailable")

        async with self.async_session_maker() as session:
            yield session

    async def test_connection(self) -> bool:
        if not self.async_session_maker:
            raise RuntimeError("Database not initialized.")

        try:
            async with self.async_session_maker() as session:
                result = await session.execute(text("SELECT 1"))
                if result.scalar() != 1:
                    raise RuntimeError("❌ Record store connection test failed.")
                self.logger.info("✅ Record store connection test passed.")
                return True
        except Exception:
            self.logger.exception("❌ Record store connection test failed.")
            raise

    async def close(self) -> None:
        """Dispose the connection pool."""
        if self.async_engine:
            try:
                await self.async_engine.dispose()
                self.async_engine = None
                self.async_session_maker = None
                self.logger.info("✅ Record store engine disposed successfully.")
            except Exception:
                self.logger.exception("❌ Failed to dispose the record store engine.")
                raise


mysql_manager = MySQLManager()
