import os
from datetime import timedelta
from dotenv import load_dotenv

load_dotenv()


def _flag(name, default="false"):
    return os.getenv(name, default).lower() in ("1", "true", "yes", "on")


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", SECRET_KEY)
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(minutes=int(os.getenv("JWT_ACCESS_MINUTES", "60")))
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Page tree
    CHEMISTRY_CASE_SENSITIVE_PATHS = _flag("CHEMISTRY_CASE_SENSITIVE_PATHS")
    CHEMISTRY_NOT_FOUND_PATH = os.getenv("CHEMISTRY_NOT_FOUND_PATH", "404")

    # Listings
    CHEMISTRY_LATEST_LIMIT = int(os.getenv("CHEMISTRY_LATEST_LIMIT", "1"))
    CHEMISTRY_CHILDREN_PER_PAGE = int(os.getenv("CHEMISTRY_CHILDREN_PER_PAGE", "20"))
    CHEMISTRY_MAX_PER_PAGE = int(os.getenv("CHEMISTRY_MAX_PER_PAGE", "100"))

    # Feature toggles
    CHEMISTRY_FEATURES = {
        "enquiries": _flag("CHEMISTRY_ENQUIRIES", "true"),
        "bundle": _flag("CHEMISTRY_BUNDLE", "true"),
    }

    # Enquiry mail headers, handed to the mailer with each enquiry
    CHEMISTRY_ENQUIRY_MAIL_TO = os.getenv("CHEMISTRY_ENQUIRY_MAIL_TO", "")
    CHEMISTRY_ENQUIRY_SUBJECT = os.getenv("CHEMISTRY_ENQUIRY_SUBJECT", "Website enquiry")


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.getenv("DEV_DATABASE_URI", "sqlite:///chemistry-dev.db")


class TestingConfig(BaseConfig):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    JWT_SECRET_KEY = "testing-secret-key-that-is-long-enough"


class ProductionConfig(BaseConfig):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI")


config_by_name = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig
}
