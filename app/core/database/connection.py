from app.core.logger import logger_manager
from app.core.database.mysql import mysql_manager
from app.core.database.redis import redis_manager

logger = logger_manager.get_logger(__name__)


class DatabaseConnectionManager:
    """Startup/shutdown owner for the record store and Redis clients."""

    def __init__(self):
        self.redis_manager = redis_manager
        self.mysql_manager = mysql_manager

    async def initialize(self) -> None:
        await self.redis_manager.initialize_async()
        await self.mysql_manager.initialize()
        await self.mysql_manager.create_tables()

    async def test_connections(self) -> bool:
        try:
            await self.mysql_manager.test_connection()
            await self.redis_manager.async_test_connection()
            logger.info("✅ All database connections tested successfully")
            return True
        except Exception as e:
            logger.error(f"❌ Connection test failed: {e}")
            raise

    async def close(self) -> None:
        await self.redis_manager.close()
        await self.mysql_manager.close()


db_manager = DatabaseConnectionManager()
