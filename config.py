import os
from dotenv import load_dotenv

load_dotenv()  # reads variables from .env


def _database_uri():
    override = os.getenv("DATABASE_URL")
    if override:
        return override

    user = os.getenv("DB_USER", "root")
    password = os.getenv("DB_PASSWORD")
    host = os.getenv("DB_HOST", "localhost")
    name = os.getenv("DB_NAME", "cvision")

    # MySQL through the PyMySQL driver
    if not password:
        return f"mysql+pymysql://{user}@{host}/{name}"
    return f"mysql+pymysql://{user}:{password}@{host}/{name}"


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "change-me-in-production")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", SECRET_KEY)
    JWT_ACCESS_TOKEN_HOURS = int(os.getenv("JWT_ACCESS_TOKEN_HOURS", "3"))

    DB_HOST = os.getenv("DB_HOST", "localhost")
    DB_USER = os.getenv("DB_USER", "root")
    DB_PASSWORD = os.getenv("DB_PASSWORD")
    DB_NAME = os.getenv("DB_NAME", "cvision")

    SQLALCHEMY_DATABASE_URI = _database_uri()
    SQLALCHEMY_TRACK_MODIFICATIONS = False  # disables overhead warning

    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:3000")

    # shared secret the analysis pipeline sends in X-Analysis-Key; unset disables the check
    ANALYSIS_API_KEY = os.getenv("ANALYSIS_API_KEY")

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret-key"
    JWT_SECRET_KEY = "test-jwt-secret-key-with-enough-length"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    ANALYSIS_API_KEY = None
    LOG_LEVEL = "WARNING"
