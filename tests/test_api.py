"""
Tests for the unit converter API.
"""

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from conftest import START
from unit_converter.api.app import create_app
from unit_converter.config import get_settings
from unit_converter.context import AppContext
from unit_converter.errors import ApiError
from unit_converter.services import CurrencyRateCache


@pytest.fixture
def rate_cache(source, store, clock):
    return CurrencyRateCache(source=source, store=store, expire_after=timedelta(weeks=1), clock=clock)


@pytest.fixture
def client(rate_cache):
    """Create a test client around an injected context."""
    context = AppContext(settings=get_settings(), rate_cache=rate_cache)
    with TestClient(create_app(context)) as test_client:
        yield test_client


def test_root(client):
    """Test root endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Unit Converter API"
    assert "convert" in data["endpoints"]


def test_health(client):
    """Health reports the store and the table state."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["store_healthy"] is True
    assert data["rates_fresh"] is False


def test_health_degraded_when_store_down(client, store):
    store.fail_on_load = True
    response = client.get("/health")
    assert response.json()["status"] == "degraded"


def test_units(client):
    response = client.get("/units")
    assert response.status_code == 200
    units = response.json()["units"]
    assert len(units) == 17
    assert units[0] == {"family": "length", "long_name": "meter", "short_name": "m", "is_base": True}


def test_convert(client):
    response = client.post("/convert", json={"value": 100, "from_unit": "m", "to_unit": "km"})
    assert response.status_code == 200
    assert response.json() == {"value": 0.1, "unit": "kilometer (km)", "display": "0.1 kilometer (km)"}


def test_convert_currency(client, source):
    response = client.post("/convert", json={"value": 10, "from_unit": "USD", "to_unit": "EUR"})
    assert response.status_code == 200
    assert response.json()["value"] == pytest.approx(9.2)
    assert source.calls == 1


def test_convert_unknown_unit(client):
    response = client.post("/convert", json={"value": 1, "from_unit": "parsec", "to_unit": "km"})
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid unit: parsec"


def test_convert_incompatible_units(client):
    response = client.post("/convert", json={"value": 1, "from_unit": "m", "to_unit": "kg"})
    assert response.status_code == 422
    assert "Cannot convert from meter (m) to kilogram (kg)" in response.json()["detail"]


def test_convert_negative_value_rejected(client):
    response = client.post("/convert", json={"value": -1, "from_unit": "m", "to_unit": "km"})
    assert response.status_code == 422


def test_convert_rate_failure(client, source):
    source.queue.append(ApiError("Could not reach pricing source"))
    response = client.post("/convert", json={"value": 1, "from_unit": "USD", "to_unit": "EUR"})
    assert response.status_code == 502


def test_command(client):
    response = client.post("/command", json={"input": "1 kg -> g"})
    assert response.status_code == 200
    assert response.json() == {"output": "1000 gram (g)"}


def test_command_bogus(client):
    response = client.post("/command", json={"input": "bogus"})
    assert response.status_code == 200
    assert response.json()["output"].startswith("Invalid input.")


def test_rates_and_refresh(client, source):
    response = client.get("/rates")
    assert response.status_code == 200
    assert response.json()["rates"] == {}
    assert response.json()["last_refreshed"] is None

    response = client.post("/rates/refresh")
    assert response.status_code == 200
    data = response.json()
    assert data["base"] == "USD"
    assert data["rates"]["EUR"] == 0.92
    assert data["last_refreshed"] == START.timestamp()
    assert data["is_fresh"] is True
    assert source.calls == 1


def test_refresh_failure(client, source):
    source.queue.append(ApiError("Could not reach pricing source"))
    response = client.post("/rates/refresh")
    assert response.status_code == 502
    assert "Could not reach pricing source" in response.json()["detail"]


def test_stats(client):
    client.post("/command", json={"input": "1 USD -> EUR"})
    response = client.get("/stats")
    assert response.status_code == 200
    data = response.json()
    assert data["refreshes"] == 1
    assert data["persistence"] is True
