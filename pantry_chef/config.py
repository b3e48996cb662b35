import os

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_flag(name, default):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Settings read from the environment (and a local .env file)."""

    TESTING = False

    SPOONACULAR_API_KEY = os.getenv("SPOONACULAR_API_KEY")
    SPOONACULAR_BASE_URL = os.getenv("SPOONACULAR_BASE_URL", "https://api.spoonacular.com")
    SPOONACULAR_TIMEOUT = float(os.getenv("SPOONACULAR_TIMEOUT", "10"))
    RECIPE_RESULTS_PER_REQUEST = int(os.getenv("RECIPE_RESULTS_PER_REQUEST", "10"))

    FIREBASE_PROJECT_ID = os.getenv("FIREBASE_PROJECT_ID")
    FIREBASE_CLIENT_EMAIL = os.getenv("FIREBASE_CLIENT_EMAIL")
    FIREBASE_PRIVATE_KEY = os.getenv("FIREBASE_PRIVATE_KEY")
    FIREBASE_CREDENTIALS_FILE = os.getenv("FIREBASE_CREDENTIALS_FILE")

    ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")
    RATELIMIT_ENABLED = _env_flag("RATELIMIT_ENABLED", True)
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    @classmethod
    def missing_variables(cls):
        required = ["SPOONACULAR_API_KEY"]
        if not cls.FIREBASE_CREDENTIALS_FILE:
            required += ["FIREBASE_PROJECT_ID", "FIREBASE_CLIENT_EMAIL", "FIREBASE_PRIVATE_KEY"]
        return [var for var in required if not getattr(cls, var)]

    @classmethod
    def validate(cls):
        missing_vars = cls.missing_variables()
        if missing_vars:
            raise EnvironmentError(f"Missing required environment variables: {', '.join(missing_vars)}")


class TestingConfig(Config):
    TESTING = True
    SPOONACULAR_API_KEY = "test-key"
    RATELIMIT_ENABLED = False
