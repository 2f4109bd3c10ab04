from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    MONGO_URI: str = "mongodb://localhost:27017"
    MONGO_DB: str = "product_catalog"
    MONGO_TIMEOUT_MS: int = 3000

    HOST: str = "0.0.0.0"
    PORT: int = 3000

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"

settings = Settings()
