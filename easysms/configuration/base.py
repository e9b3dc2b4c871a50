"""Shared base class for settings modules."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class EasySmsBaseSettings(BaseSettings):
    """Base class for easysms settings.

    All settings classes should inherit from this class to ensure
    consistent configuration behavior (env prefix, env file loading,
    case insensitivity).
    """

    model_config = SettingsConfigDict(
        env_prefix="EASYSMS_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )
