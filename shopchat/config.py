from pathlib import Path
from pydantic_settings import BaseSettings

BASE_DIR = Path(__file__).resolve().parent.parent

class Settings(BaseSettings):
    SHOPIFY_STORE_URL: str = ""             # e.g. my-shop.myshopify.com
    SHOPIFY_ACCESS_TOKEN: str = ""
    SHOPIFY_API_VERSION: str = "2024-10"
    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-2.5-flash"
    STORE_CURRENCY: str = "PKR"             # change based on your store currency
    SESSIONS_FILE: str = "./sessions.json"
    MAX_HISTORY: int = 10
    PORT: int = 5000
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
