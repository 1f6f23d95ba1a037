"""Default data for a fresh database."""
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.facility_settings import FacilitySettings
from app.schemas.configuration import Configuration
from app.schemas.court import CourtCreate, CourtType
from app.services.configuration_store import SETTINGS_ROW_ID, ConfigurationStore
from app.services.court_registry import CourtRegistry

logger = logging.getLogger(__name__)

DEFAULT_COURTS = [
    CourtCreate(
        name="Court 1",
        type=CourtType.INDOOR,
        capacity=10,
        description="Indoor court with latest-generation synthetic turf",
        features=["Indoor", "LED lighting", "Synthetic turf"],
        order=1,
    ),
    CourtCreate(
        name="Court 2",
        type=CourtType.GRASS,
        capacity=10,
        description="Open-air court with natural grass",
        features=["Open air", "Natural grass", "Night lighting"],
        order=2,
    ),
]


async def seed_defaults(db: AsyncSession) -> None:
    """Store the default configuration and courts if none exist yet."""
    if await db.get(FacilitySettings, SETTINGS_ROW_ID) is None:
        await ConfigurationStore(db).save(Configuration())
        logger.info("Seeded default facility configuration")

    registry = CourtRegistry(db)
    if not await registry.list():
        for court in DEFAULT_COURTS:
            await registry.create(court)
        logger.info(f"Seeded {len(DEFAULT_COURTS)} default courts")
