import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SECRET_KEY = os.getenv("SECRET_KEY", "quillmarket-dev-secret-not-for-production")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "quillmarket-dev-jwt-secret-not-for-production")

    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite://")
    CREATE_TABLES_ON_STARTUP = False

    # session credentials travel as cookies for the browser, bearer header for API clients
    JWT_TOKEN_LOCATION = ["headers", "cookies"]
    JWT_COOKIE_SECURE = os.getenv("JWT_COOKIE_SECURE", "false").lower() == "true"
    JWT_COOKIE_SAMESITE = "Lax"
    JWT_COOKIE_CSRF_PROTECT = True

    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173")

    ACCESS_EXPIRES = int(os.getenv("ACCESS_EXPIRES", 86400))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # reporting-only share of completed orders, never withheld from writers
    PLATFORM_COMMISSION_RATE = float(os.getenv("PLATFORM_COMMISSION_RATE", 0.10))


class DevelopmentConfig(Config):
    DEBUG = True
    CREATE_TABLES_ON_STARTUP = True


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    JWT_SECRET_KEY = "quillmarket-testing-jwt-secret-with-enough-length"
    JWT_COOKIE_CSRF_PROTECT = False
    BCRYPT_LOG_ROUNDS = 4
    LOG_LEVEL = "WARNING"


class ProductionConfig(Config):
    DEBUG = False
    # secrets must come from the environment
    SECRET_KEY = os.getenv("SECRET_KEY")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY")
    REQUIRED_SETTINGS = ("SECRET_KEY", "JWT_SECRET_KEY")
    JWT_COOKIE_SECURE = True


CONFIGS = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}
