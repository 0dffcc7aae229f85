import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    # Kept as raw strings: the CLI converts and validates them as flag defaults.
    CHECK_HTTP_TIMEOUT: str = os.getenv("CHECK_HTTP_TIMEOUT", "15")
    CHECK_HTTP_LOG_LEVEL: str = os.getenv("CHECK_HTTP_LOG_LEVEL", "WARNING")


settings = Settings()
