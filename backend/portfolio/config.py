import os
from dotenv import load_dotenv

load_dotenv()

class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", SECRET_KEY)
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Object storage (uploaded images and resumes)
    STORAGE_ROOT = os.getenv("STORAGE_ROOT", "storage")
    PUBLIC_STORAGE_URL = os.getenv("PUBLIC_STORAGE_URL", "/storage")
    STORAGE_BUCKETS = tuple(
        b.strip()
        for b in os.getenv("STORAGE_BUCKETS", "assets,resumes,projects,certificates").split(",")
        if b.strip()
    )
    MAX_CONTENT_LENGTH = 5 * 1024 * 1024

class DevelopmentConfig(BaseConfig):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.getenv("DEV_DATABASE_URI", "sqlite:///portfolio-dev.db")

class TestingConfig(BaseConfig):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    JWT_SECRET_KEY = "testing-jwt-secret-with-enough-length"
    LOG_LEVEL = "DEBUG"

class ProductionConfig(BaseConfig):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI")

config_by_name = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig
}
