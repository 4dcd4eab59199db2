import os
from pathlib import Path
from dotenv import load_dotenv
from pydantic_settings import BaseSettings
from app.core.logger import logger_manager


logger = logger_manager.get_logger(__name__)

# Load environment variables from .env file
ENV = os.getenv("ENV", "development")

# secret/.env.{ENV} at the project root (4 levels up from config/base.py)
ENV_FILE = Path(__file__).resolve().parent.parent.parent.parent / f"secret/.env.{ENV}"

if ENV_FILE.exists():
    load_dotenv(dotenv_path=ENV_FILE, override=True)
else:
    logger.warning(
        f"Environment file {ENV_FILE} does not exist. Using system environment variables."
    )


class EnvBaseSettings(BaseSettings):
    """
    Base settings class that loads environment variables.
    All settings should inherit from this class.
    """

    class Config:
        env_file = ENV_FILE
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "allow"
