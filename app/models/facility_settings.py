"""Facility settings model."""
from sqlalchemy import Column, DateTime, Integer, JSON
from sqlalchemy.sql import func
from app.core.database import Base


class FacilitySettings(Base):
    """Singleton row holding the facility configuration document."""

    __tablename__ = "facility_settings"

    id = Column(Integer, primary_key=True, default=1)
    data = Column(JSON, nullable=False)  # See app.schemas.configuration.Configuration
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
