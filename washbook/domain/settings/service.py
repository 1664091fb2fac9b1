"""Settings service - Business hours lookup and admin settings persistence"""

import logging

from sqlalchemy.orm import Session

from ...config import DEFAULT_BUSINESS_HOURS_END, DEFAULT_BUSINESS_HOURS_START
from ...shared.validators import validate_clock_time
from ..availability.calculator import BusinessHours
from .repository import SettingsRepository
from .schemas import SettingsUpdate

logger = logging.getLogger(__name__)

BUSINESS_HOURS_START_KEY = "business_hours_start"
BUSINESS_HOURS_END_KEY = "business_hours_end"


def default_settings() -> dict[str, str]:
    """Values shown for keys that have never been saved"""
    defaults = SettingsUpdate(
        business_hours_start=DEFAULT_BUSINESS_HOURS_START,
        business_hours_end=DEFAULT_BUSINESS_HOURS_END,
    )
    return defaults.to_setting_values()


class SettingsService:
    """Service layer for admin settings"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = SettingsRepository()

    def get_business_hours(self) -> BusinessHours:
        """Read opening hours, substituting defaults for absent or malformed rows"""
        stored = self.repo.get_values(self.db, [BUSINESS_HOURS_START_KEY, BUSINESS_HOURS_END_KEY])
        start = self._clock_or_default(
            stored.get(BUSINESS_HOURS_START_KEY), DEFAULT_BUSINESS_HOURS_START, BUSINESS_HOURS_START_KEY
        )
        end = self._clock_or_default(
            stored.get(BUSINESS_HOURS_END_KEY), DEFAULT_BUSINESS_HOURS_END, BUSINESS_HOURS_END_KEY
        )
        return BusinessHours(start, end)

    def get_settings(self) -> dict[str, str]:
        settings = default_settings()
        settings.update(self.repo.get_all(self.db))
        return settings

    def save_settings(self, data: SettingsUpdate) -> int:
        values = data.to_setting_values()
        count = self.repo.upsert_many(self.db, values)
        logger.info(
            f"Saved {count} settings (business hours {data.business_hours_start}-{data.business_hours_end})"
        )
        return count

    @staticmethod
    def _clock_or_default(value, default: str, key: str) -> str:
        if not value:
            return validate_clock_time(default)
        try:
            return validate_clock_time(value)
        except ValueError:
            logger.warning(f"Ignoring malformed setting {key}={value!r}, using {default}")
            return validate_clock_time(default)
