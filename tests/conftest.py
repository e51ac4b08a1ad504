"""
Pytest configuration and shared fixtures.
"""

import json
import logging

import pytest

from order_search.config.logging import ROOT_LOGGER_NAME
from order_search.config.settings import get_settings


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (CLI, files on disk)")


@pytest.fixture
def sample_orders():
    """A small transportation order export."""
    return [
        {
            "id": "1",
            "order_number": "TRQ_1001",
            "vin_number": "1HGCM82633A004352",
            "pickup_company_name": "Sunrise Motors",
            "delivery_company_name": "Bay Auto Group",
            "vehicle_make": "BMW",
            "vehicle_model": "X5",
            "vehicle_year": 2019,
            "status": "pending",
            "notes": "fragile cargo",
            "created_at": "2024-01-10T09:00:00Z",
            "assigned_admin_id": None,
        },
        {
            "id": "2",
            "order_number": "TRQ_1002",
            "vin_number": "4T1BF1FK5CU123456",
            "pickup_company_name": "Lakeside Dealers",
            "delivery_company_name": "New York Auto Hub",
            "vehicle_make": "Toyota",
            "vehicle_model": "Camry",
            "vehicle_year": 2021,
            "status": "quoted",
            "created_at": "2024-01-15T23:59:59.999Z",
            "assigned_admin_id": "admin-7",
        },
        {
            "id": "3",
            "order_number": "TRQ_1003",
            "vehicle_make": "Ford",
            "vehicle_model": "F-150",
            "vehicle_year": 2018,
            "status": "completed",
            "created_at": "2024-01-16T00:00:00Z",
            "assigned_admin_id": "admin-2",
        },
        {
            "id": "4",
            "order_number": "TRQ_1004",
            "vehicle_make": "BMW",
            "vehicle_model": "M3",
            "status": "cancelled",
            "created_at": "not a date",
        },
    ]


@pytest.fixture
def orders_file(tmp_path, sample_orders):
    """The sample orders written to a JSON export on disk."""
    path = tmp_path / "orders.json"
    path.write_text(json.dumps(sample_orders), encoding="utf-8")
    return path


@pytest.fixture
def clean_settings(monkeypatch):
    """Reset cached settings and keep logging quiet for the test."""
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    monkeypatch.delenv("FUZZY_THRESHOLD", raising=False)
    monkeypatch.delenv("LOG_FILE", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
