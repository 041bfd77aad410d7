from geoformat.core.constants import TRUTHY_VALUES
import os


def _env_flag(name: str) -> bool:
    return os.getenv(name, '').strip().lower() in TRUTHY_VALUES


class Settings:
    SUPPRESS_CRS_SERIALIZATION: bool = _env_flag('GEOFORMAT_SUPPRESS_CRS')
    LOG_LEVEL: str | None = os.getenv('GEOFORMAT_LOG_LEVEL')
