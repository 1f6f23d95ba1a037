"""Facility configuration storage."""
import logging
from typing import Any, Dict

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.facility_settings import FacilitySettings
from app.schemas.configuration import Configuration, ConfigurationUpdate

logger = logging.getLogger(__name__)

SETTINGS_ROW_ID = 1


def deep_merge(base: Dict[str, Any], changes: Dict[str, Any]) -> Dict[str, Any]:
    """Merge ``changes`` into ``base``; nested dicts are merged key by key."""
    merged = dict(base)
    for key, value in changes.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def parse_configuration(data: Any) -> Configuration:
    """
    Build a Configuration from a stored document.

    Missing keys take their defaults. A document that cannot be parsed at all
    falls back to the full default configuration.
    """
    defaults = Configuration().model_dump(mode="json")
    if not isinstance(data, dict):
        logger.warning("Stored configuration is not a JSON object, using defaults")
        return Configuration()
    try:
        return Configuration.model_validate(deep_merge(defaults, data))
    except ValidationError as e:
        logger.warning(f"Stored configuration is invalid, using defaults: {e}")
        return Configuration()


class ConfigurationStore:
    """Reads and updates the singleton facility configuration."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _row(self):
        result = await self.db.execute(
            select(FacilitySettings).where(FacilitySettings.id == SETTINGS_ROW_ID)
        )
        return result.scalar_one_or_none()

    async def get(self) -> Configuration:
        row = await self._row()
        if row is None:
            return Configuration()
        return parse_configuration(row.data)

    async def update(self, changes: ConfigurationUpdate) -> Configuration:
        """
        Merge a partial update into the stored configuration.

        Args:
            changes: Fields to change; nested objects are merged field by field

        Returns:
            The new configuration

        Raises:
            pydantic.ValidationError: If the merged configuration is invalid
        """
        current = await self.get()
        merged = deep_merge(
            current.model_dump(mode="json"),
            changes.model_dump(mode="json", exclude_unset=True, exclude_none=True),
        )
        config = Configuration.model_validate(merged)
        await self.save(config)
        logger.info("Facility configuration updated")
        return config

    async def save(self, config: Configuration) -> None:
        row = await self._row()
        data = config.model_dump(mode="json")
        if row is None:
            self.db.add(FacilitySettings(id=SETTINGS_ROW_ID, data=data))
        else:
            row.data = data
        await self.db.commit()
