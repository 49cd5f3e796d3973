from pydantic_settings import BaseSettings, SettingsConfigDict


class LogSettings(BaseSettings):
    """Logging settings.

    Loads from MULTILOG_* environment variables and an optional `.env`.
    """

    model_config = SettingsConfigDict(
        env_prefix='MULTILOG_', env_file='.env', env_file_encoding='utf-8',
        extra='ignore',
    )

    # Console sink threshold
    level: str = 'INFO'

    # Root category, the default backend is (category, 'general')
    category: str = 'multilog'

    enable_diagnose: bool = False

    # None lets loguru auto-detect a tty
    colorize: bool | None = None


log = LogSettings()
