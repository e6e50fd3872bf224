import os
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    APP_NAME: str = "Bits"
    SECRET_KEY: str = os.getenv("SECRET_KEY", "supersecretkey123")
    ALGORITHM: str = os.getenv("ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "30"))
    # Token endpoint of the external identity provider
    AUTH_TOKEN_URL: str = os.getenv("AUTH_TOKEN_URL", "https://auth.example.com/oauth/token")

    # Database
    MONGO_URI: str = os.getenv("MONGO_URI", "mongodb://localhost:27017")
    DB_NAME: str = os.getenv("DB_NAME", "bits")

    # Frontend
    FRONTEND_URL: str = os.getenv("FRONTEND_URL", "http://localhost:5173")

    # Calendar days are cut in this zone for every streak comparison.
    DAY_TIMEZONE: str = os.getenv("DAY_TIMEZONE", "UTC")

    # Re-fetch and retry attempts when a concurrent completion wins the write
    COMPLETION_MAX_RETRIES: int = int(os.getenv("COMPLETION_MAX_RETRIES", "3"))

    # Milestone suggestions (OpenAI-compatible chat completions endpoint)
    AI_API_URL: str = os.getenv("AI_API_URL", "https://router.huggingface.co/v1/chat/completions")
    AI_API_TOKEN: str = os.getenv("AI_API_TOKEN", "")
    AI_MODEL: str = os.getenv("AI_MODEL", "CohereLabs/aya-expanse-8b:cohere")
    AI_TIMEOUT_SECONDS: float = float(os.getenv("AI_TIMEOUT_SECONDS", "30"))
    PROMPT_FOLDER: str = "templates/prompts"

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE: str = os.getenv("LOG_FILE", "")

    # Pydantic Settings Config
    model_config = {"env_file": ".env", "extra": "ignore"}

settings = Settings()
