from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    ENV: str = "dev"
    SERVICE_NAME: str = "noughts-api"

    # Client application (web frontend); used for redirects and as the CORS origin
    CLIENT_URI: str = "http://localhost:3000"

    # Logging
    LOG_LEVEL: str = "INFO"


settings = Settings()
