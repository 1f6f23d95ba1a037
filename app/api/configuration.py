"""Facility configuration endpoints."""
from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.schemas.configuration import Configuration, ConfigurationUpdate
from app.services.configuration_store import ConfigurationStore

router = APIRouter(prefix="/configuration", tags=["configuration"])


@router.get("", response_model=Configuration)
async def get_configuration(
    db: AsyncSession = Depends(get_db),
):
    """Get the facility configuration."""
    return await ConfigurationStore(db).get()


@router.patch("", response_model=Configuration)
async def update_configuration(
    config_update: ConfigurationUpdate,
    db: AsyncSession = Depends(get_db),
):
    """
    Update the facility configuration.

    Only the given fields change. Nested ``prices``, ``facility`` and
    ``regional`` objects are merged field by field.

    Args:
        config_update: Fields to update
        db: Database session

    Returns:
        Updated configuration
    """
    try:
        return await ConfigurationStore(db).update(config_update)
    except ValidationError as e:
        raise HTTPException(
            status_code=400,
            detail={
                "message": "Configuration is not valid",
                "errors": [err["msg"] for err in e.errors()],
            },
        )
