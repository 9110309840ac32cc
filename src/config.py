"""Configuration settings for ClawControl."""

from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Database
    database_url: str = "sqlite:///data/clawcontrol.db"
    database_echo: bool = False

    # API
    api_host: str = "127.0.0.1"
    api_port: int = 3000
    api_reload: bool = False

    # Logging
    log_level: str = "INFO"
    log_file: str = ""

    class Config:
        env_prefix = "CLAWCONTROL_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


class StationPolicySettings(BaseSettings):
    """Station mutation flags, read only under their exact variable names.

    Mutations stay locked unless one of these is exactly "1".
    """

    enable_station_mutations: Optional[str] = Field(
        None, validation_alias="CLAWCONTROL_ENABLE_STATION_MUTATIONS"
    )
    next_public_enable_station_mutations: Optional[str] = Field(
        None, validation_alias="NEXT_PUBLIC_ENABLE_STATION_MUTATIONS"
    )

    class Config:
        case_sensitive = True
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()
