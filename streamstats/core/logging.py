from typing import Optional

from loguru import logger

from streamstats.core.config import AppSettings


def get_app_settings() -> AppSettings:
    try:
        return AppSettings()
    except Exception as e:
        logger.error(f"Error loading settings: {e}")
        raise


def setup_logging(settings: Optional[AppSettings] = None) -> AppSettings:
    settings = settings or get_app_settings()
    logger.add(
        settings.log_file,
        level=settings.app_log_level.value.upper(),
        rotation=settings.log_rotation,
        compression=settings.log_compression.value,
        format=settings.log_format,
    )
    return settings
