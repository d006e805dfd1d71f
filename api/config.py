"""
Environment-aware configuration.
Security key, CORS, env flags and the Argon2 cost parameters.
Database URL is handled by DBStorage from APP_ENV / DATABASE_URL.
"""
import os
from dotenv import load_dotenv

load_dotenv()  # Read .env if present


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")  # Set a strong key in production
    DEBUG = False
    TESTING = False
    # CORS: in dev we usually allow '*', in prod supply a comma-separated list in env
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
    # Keep a copy of env for visibility
    APP_ENV = os.getenv("APP_ENV", "dev")
    # Argon2i costs; with a five-digit memory cost and two-digit time cost
    # the encoded hash is exactly 97 characters
    ARGON2_TIME_COST = int(os.getenv("ARGON2_TIME_COST", "16"))
    ARGON2_MEMORY_COST = int(os.getenv("ARGON2_MEMORY_COST", "65536"))
    ARGON2_PARALLELISM = int(os.getenv("ARGON2_PARALLELISM", "1"))


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    # In dev, propagate exceptions so our error handler has full context
    PROPAGATE_EXCEPTIONS = True


class TestingConfig(BaseConfig):
    TESTING = True
    APP_ENV = "test"
    # Cheaper than production but still a 97-character encoding
    ARGON2_MEMORY_COST = 16384


class ProductionConfig(BaseConfig):
    DEBUG = False


def get_config(name: str | None):
    """
    Select config class.
    - If name is provided, choose by name.
    - Else choose based on APP_ENV (dev/test/prod).
    """
    if name:
        name = name.lower()
    env = (name or os.getenv("APP_ENV", "dev")).lower()
    if env in ["prod", "production"]:
        return ProductionConfig
    if env in ["test", "testing"]:
        return TestingConfig
    return DevelopmentConfig
