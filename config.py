import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()

@dataclass
class Settings:
    # API Settings
    api_host: str = os.getenv("HOST", "127.0.0.1")
    api_port: int = int(os.getenv("PORT", "3000"))

    # Application Settings
    app_name: str = os.getenv("APP_NAME", "Book Collection API")
    app_version: str = os.getenv("APP_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "False").lower() in ("true", "1", "yes")

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    @property
    def base_url(self) -> str:
        return f"http://{self.api_host}:{self.api_port}"


settings = Settings()
