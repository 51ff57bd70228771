# tests/conftest.py

import pytest
from fastapi.testclient import TestClient
from typing import Generator

from vemio.main import app
from vemio.routers import deps
from tests.utils.fakes import FakeCategoryStatsSource, FakePricingOracle, FakeRiskDataSource

# --- Colaboradores falsos ---
# Ninguna prueba toca una base de datos real: los routers reciben
# estos dobles vía app.dependency_overrides.

@pytest.fixture(scope="function")
def oracle() -> FakePricingOracle:
    return FakePricingOracle()

@pytest.fixture(scope="function")
def risk_source() -> FakeRiskDataSource:
    return FakeRiskDataSource({
        "Agotado": (120, 35000.0),
        "Caducidad": (80, 52000.5),
        "Sin Ventas": (45, 13000.0),
    })

@pytest.fixture(scope="function")
def stats_source() -> FakeCategoryStatsSource:
    return FakeCategoryStatsSource(
        {"Papas": (45, 120), "Totopos": (32, 98), "Mix": (10, 40)},
        expiring=[("Papas", 900.0), ("Totopos", 600.0), ("Mix", 500.0)],
        catalog=["Mix", "Papas", "Totopos"],
    )

@pytest.fixture(scope="function")
def client(oracle, risk_source, stats_source) -> Generator:
    """TestClient con los colaboradores externos sobrescritos."""
    app.dependency_overrides[deps.get_pricing_oracle] = lambda: oracle
    app.dependency_overrides[deps.get_risk_data_source] = lambda: risk_source
    app.dependency_overrides[deps.get_category_stats_source] = lambda: stats_source

    yield TestClient(app)

    app.dependency_overrides.clear()
