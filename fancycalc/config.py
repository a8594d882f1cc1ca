from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "KA Fancy Performance Calculator"
    DATABASE_URL: str = "sqlite:///./grades.db"
    LOG_LEVEL: str = "INFO"

    # Profile used when an export names no shape we know
    DEFAULT_SHAPE: str = "Pear 8 Mains"

    # Measurement exports are a few KB - anything bigger is not an export
    MAX_UPLOAD_BYTES: int = 1024 * 1024

    # Seed file for the grade lookup tables (loaded on first run if present)
    GRADE_SEED_PATH: str = "data/grade_tables.json"

    class Config:
        env_file = ".env"


settings = Settings()
