from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Server
    host: str = "0.0.0.0"
    port: int = 8080

    # Logging
    log_level: str = "INFO"
    log_json: bool = True
    log_file: str = ""  # empty disables the file handler
    log_requests: bool = True  # dump inbound headers/body at DEBUG

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_level(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().upper()
        return v

    model_config = {"env_file": ".env"}
