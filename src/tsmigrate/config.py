import os

from pydantic import BaseModel, ConfigDict

_TRUTHY = {"1", "true", "yes", "on"}


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    log_level: str = "WARNING"
    jobs: int = 1
    remove_original: bool = False
    skip_invalid: bool = True


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


def get_settings() -> Settings:
    return Settings(
        log_level=os.getenv("TSMIGRATE_LOG_LEVEL", "WARNING").upper(),
        jobs=int(os.getenv("TSMIGRATE_JOBS", "1")),
        remove_original=_env_flag("TSMIGRATE_REMOVE_ORIGINAL", False),
        skip_invalid=_env_flag("TSMIGRATE_SKIP_INVALID", True),
    )
