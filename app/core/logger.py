import sys
from pathlib import Path
from typing import Optional
from loguru import logger


CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
    "{level: <8} | "
    "{name}:{function}:{line} | "
    "{message}"
)


class LoggerManager:
    def __init__(self):
        # settings import is deferred: config modules log through this manager
        self._config = None
        logger.remove()
        self._is_setup = False

    @property
    def config(self):
        if self._config is None:
            from app.core.config.settings import settings

            self._config = settings.logging
        return self._config

    def setup(self) -> None:
        """Install the console and file sinks once per process."""
        if self._is_setup:
            return

        try:
            if self.config.LOG_TO_CONSOLE:
                logger.add(
                    sys.stderr,
                    level=self.config.LOG_CONSOLE_LEVEL.upper(),
                    format=CONSOLE_FORMAT,
                    colorize=True,
                    backtrace=True,
                    diagnose=False,
                )

            if self.config.LOG_TO_FILE:
                log_path = Path(self.config.LOG_FILE_PATH)
                log_path.parent.mkdir(parents=True, exist_ok=True)

                logger.add(
                    str(log_path),
                    level=self.config.LOG_LEVEL.upper(),
                    format=FILE_FORMAT,
                    rotation=self.config.LOG_ROTATION or "1 day",
                    retention=self.config.LOG_RETENTION_PERIOD or "7 days",
                    compression="zip",
                    backtrace=True,
                    diagnose=False,
                    enqueue=True,
                    encoding="utf-8",
                )

            self._is_setup = True
            logger.info("✅ Loguru logging setup complete.")

        except Exception as e:
            logger.add(
                sys.stderr,
                level="INFO",
                format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
                colorize=True,
            )
            logger.error(f"Critical error in logging setup: {e}")

    def get_logger(self, name: Optional[str] = None):
        """
        Return the shared loguru logger, bound to ``name`` when given.
        """
        if name:
            return logger.bind(name=name)
        return logger


logger_manager = LoggerManager()
