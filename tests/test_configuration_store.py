from datetime import date, time
from decimal import Decimal

import pytest
from pydantic import ValidationError

from app.models.facility_settings import FacilitySettings
from app.schemas.configuration import ConfigurationUpdate
from app.services.configuration_store import (
    SETTINGS_ROW_ID,
    ConfigurationStore,
    deep_merge,
    parse_configuration,
)


def test_deep_merge_keeps_untouched_nested_keys():
    base = {"prices": {"normal": 40, "night": 48}, "slot_duration": 60}
    merged = deep_merge(base, {"prices": {"night": 55}})
    assert merged == {"prices": {"normal": 40, "night": 55}, "slot_duration": 60}
    assert base["prices"]["night"] == 48


def test_parse_configuration_fills_missing_keys():
    config = parse_configuration({"slot_duration": 90})
    assert config.slot_duration == 90
    assert config.opening_time == time(8, 0)


def test_parse_configuration_falls_back_on_garbage():
    assert parse_configuration("not a dict").slot_duration == 60
    assert parse_configuration({"opening_time": "23:00", "closing_time": "08:00"}).opening_time == time(8, 0)


@pytest.mark.asyncio
async def test_defaults_without_stored_row(db):
    config = await ConfigurationStore(db).get()
    assert config.opening_time == time(8, 0)
    assert config.closing_time == time(23, 0)
    assert config.slot_duration == 60
    assert config.prices.night == Decimal("48")


@pytest.mark.asyncio
async def test_partial_update_merges_nested_fields(db):
    store = ConfigurationStore(db)
    await store.update(ConfigurationUpdate(prices={"night": Decimal("55")}))
    await store.update(ConfigurationUpdate(blocked_dates=[date(2024, 12, 25)]))

    config = await store.get()
    assert config.prices.night == Decimal("55")
    assert config.prices.normal == Decimal("40")
    assert config.blocked_dates == [date(2024, 12, 25)]
    assert config.regional.timezone == "Europe/Madrid"


@pytest.mark.asyncio
async def test_invalid_update_changes_nothing(db):
    store = ConfigurationStore(db)
    with pytest.raises(ValidationError):
        await store.update(ConfigurationUpdate(opening_time=time(23, 30)))

    config = await store.get()
    assert config.opening_time == time(8, 0)


@pytest.mark.asyncio
async def test_malformed_stored_document_uses_defaults(db):
    db.add(FacilitySettings(id=SETTINGS_ROW_ID, data=["not", "an", "object"]))
    await db.commit()

    config = await ConfigurationStore(db).get()
    assert config.slot_duration == 60
