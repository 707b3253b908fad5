"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

from pathlib import Path
from typing import Any

import pytest

from cashplan.core import config as config_module
from cashplan.core.json_utils import write_json


@pytest.fixture
def temp_dir(tmp_path) -> Path:
    """Temporary directory for test files."""
    return tmp_path


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, tmp_path):
    """Point configuration at a throwaway data directory."""
    monkeypatch.setenv("CASHPLAN_ENV", "test")
    monkeypatch.setenv("CASHPLAN_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.delenv("CASHPLAN_SNAPSHOT_FILE", raising=False)
    monkeypatch.delenv("CASHPLAN_PAYOUT_PCT", raising=False)
    monkeypatch.delenv("CASHPLAN_DEFAULT_HORIZON", raising=False)
    monkeypatch.delenv("CASHPLAN_DEFAULT_START_MONTH", raising=False)
    monkeypatch.setattr(config_module, "_config", None)


@pytest.fixture
def sample_state() -> dict[str, Any]:
    """Small workspace snapshot with revenue, extras, outgoings and actuals."""
    return {
        "settings": {"startMonth": "2025-11", "horizonMonths": 4, "openingBalance": "10.000,00"},
        "monthlyAmazonEur": "20.000",
        "payoutPct": 0.5,
        "extras": [
            {"month": "2025-12", "amountEur": "1.500,50"},
            {"month": "2026-01", "amountEur": "-500"},
        ],
        "outgoings": [
            {"month": "2025-11", "amountEur": "-4.000"},
            {"month": "2026-02", "amountEur": "2.000"},
            {"month": "2027-01", "amountEur": "99.999"},
        ],
        "actuals": [{"month": "2025-12", "closingBalanceEur": "25.000"}],
        "suppliers": [
            {
                "id": "sup-1",
                "productionLeadTimeDaysDefault": 30,
                "skuOverrides": {"SKU-A ": 12},
            }
        ],
        "products": [
            {"sku": "sku-a", "productionLeadTimeDaysDefault": 60},
            {"sku": "sku-b", "productionLeadTimeDaysDefault": 45},
        ],
        "productSuppliers": [
            {"sku": "SKU-B", "supplierId": "sup-1", "productionLeadTimeDays": 0},
        ],
    }


@pytest.fixture
def snapshot_file(temp_dir, sample_state) -> Path:
    """Sample state written as a bare JSON state file."""
    path = temp_dir / "state.json"
    write_json(path, sample_state)
    return path


def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for complete workflows")
    config.addinivalue_line("markers", "currency: Tests for amount parsing and formatting")
    config.addinivalue_line("markers", "projection: Tests for the balance projection engine")
    config.addinivalue_line("markers", "leadtime: Tests for lead-time resolution")
