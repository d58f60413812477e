from typing import Iterator

import pytest
from hotel_inventory.config import get_settings
from hotel_inventory.deps import get_customer_id
from fastapi import HTTPException


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Iterator[None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.mark.asyncio
async def test_get_customer_id_strips_header() -> None:
    assert await get_customer_id(x_customer_id=" cust-9 ") == "cust-9"


@pytest.mark.asyncio
@pytest.mark.parametrize("value", [None, "", "   "])
async def test_get_customer_id_rejects_missing_header(value: str | None) -> None:
    with pytest.raises(HTTPException) as excinfo:
        await get_customer_id(x_customer_id=value)
    assert excinfo.value.status_code == 400


def test_settings_read_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ALTERNATIVE_SEARCH_DAYS", "21")
    monkeypatch.setenv("MAX_ALTERNATIVES", "3")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("ECHO_SQL", "1")
    settings = get_settings()
    assert settings.alternative_search_days == 21
    assert settings.max_alternatives == 3
    assert settings.log_level == "DEBUG"
    assert settings.echo_sql is True


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("ALTERNATIVE_SEARCH_DAYS", "MAX_ALTERNATIVES", "LOG_LEVEL", "ECHO_SQL", "DATABASE_URL"):
        monkeypatch.delenv(name, raising=False)
    settings = get_settings()
    assert settings.alternative_search_days == 14
    assert settings.max_alternatives == 5
    assert settings.database_url.startswith("mysql+aiomysql://")
