from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_prefix": "FI_", "env_file": ".env", "env_file_encoding": "utf-8"}

    auth_username: str = Field(default="admin")
    auth_password: str = Field(min_length=1)
    auth_user_id: int = Field(default=1, ge=1)
    jwt_secret: str = Field(min_length=32)
    jwt_expire_minutes: int = Field(default=1440)
    log_level: str = Field(default="INFO")
    log_json: bool = Field(default=False)
    db_path: str = Field(default="filament_inventory.db")
    cors_origins: str = Field(default="http://localhost:3000")


settings = Settings()
