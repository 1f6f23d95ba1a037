"""Court model."""
from sqlalchemy import Boolean, Column, DateTime, Integer, JSON, Numeric, String, Text
from sqlalchemy.sql import func
from app.core.database import Base


class Court(Base):
    """Represents a bookable court at the facility."""

    __tablename__ = "courts"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    type = Column(String, nullable=False, default="indoor")  # indoor, grass, turf
    active = Column(Boolean, nullable=False, default=True)
    capacity = Column(Integer, nullable=False, default=10)
    description = Column(Text, nullable=True)
    features = Column(JSON, nullable=True)  # ["LED lighting", "Changing rooms"]
    image = Column(String, nullable=True)

    # Per-court overrides of the facility price tiers
    price_normal = Column(Numeric(10, 2), nullable=True)
    price_night = Column(Numeric(10, 2), nullable=True)
    price_weekend = Column(Numeric(10, 2), nullable=True)

    order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
