# tests/unit/test_promotion_aggregator.py

import pytest

from vemio.schemas import PromocionItem
from vemio.services.errors import UpstreamError, ValidationError
from vemio.services.promotion_aggregator import PromotionAggregator
from tests.utils.fakes import FakePricingOracle, expected_metrics, random_items

def test_calculate_returns_one_rollup_per_category():
    """
    Caso feliz: un descuento, dos categorías distintas, una llamada al
    oráculo por item y un rollup por categoría.
    """
    # --- Arrange ---
    oracle = FakePricingOracle()
    aggregator = PromotionAggregator(oracle)
    items = [{"elasticidad": 1.5, "categoria": "PAPAS"}, {"elasticidad": 1.8, "categoria": "TOTOPOS"}]

    # --- Act ---
    result = aggregator.calculate(0.41, items)

    # --- Assert ---
    assert list(result.items) == ["PAPAS", "TOTOPOS"]
    assert oracle.calls == [(0.41, 1.5, "PAPAS"), (0.41, 1.8, "TOTOPOS")]

    papas = result.items["PAPAS"]
    assert papas.descuento == 0.41  # fracción, sin reescalar
    assert papas.elasticidad == 1.5
    assert papas.categoria == "PAPAS"
    assert papas.valor == expected_metrics(0.41, 1.5, "PAPAS").valor

def test_calculate_echoes_discount_and_items_in_config():
    aggregator = PromotionAggregator(FakePricingOracle())
    items = [{"elasticidad": 1.2, "categoria": "X"}]

    result = aggregator.calculate(0.3, items)

    assert result.config.descuento_maximo == 0.3
    assert result.config.items == [PromocionItem(elasticidad=1.2, categoria="X")]

def test_calculate_duplicate_category_last_write_wins():
    oracle = FakePricingOracle()
    aggregator = PromotionAggregator(oracle)
    items = [{"elasticidad": 1.2, "categoria": "X"}, {"elasticidad": 2.0, "categoria": "X"}]

    result = aggregator.calculate(0.3, items)

    assert len(result.items) == 1
    assert result.items["X"].elasticidad == 2.0
    assert result.items["X"].ventas_plus == expected_metrics(0.3, 2.0, "X").ventas_plus
    # Las dos llamadas se hicieron; solo se descarta el resultado anterior
    assert len(oracle.calls) == 2

def test_calculate_accepts_promocion_item_instances():
    aggregator = PromotionAggregator(FakePricingOracle())

    result = aggregator.calculate(0, [PromocionItem(elasticidad=1.1, categoria="Mix")])

    assert result.items["Mix"].descuento == 0.0

@pytest.mark.parametrize("discount", [1.5, -0.1, "0.3", None, True])
def test_calculate_rejects_invalid_discount(discount):
    oracle = FakePricingOracle()
    aggregator = PromotionAggregator(oracle)

    with pytest.raises(ValidationError) as excinfo:
        aggregator.calculate(discount, [{"elasticidad": 1.2, "categoria": "X"}])

    assert "descuento" in str(excinfo.value)
    assert oracle.calls == []

@pytest.mark.parametrize(
    "items, message",
    [
        ([], "items must be a non-empty array"),
        (None, "items must be a non-empty array"),
        ([{"elasticidad": "1.2", "categoria": "X"}], "items[0].elasticidad"),
        ([{"elasticidad": 0, "categoria": "X"}], "items[0].elasticidad must be greater than 0"),
        ([{"elasticidad": 1.2, "categoria": "X"}, {"elasticidad": 1.2, "categoria": 7}], "items[1].categoria"),
        ([{"elasticidad": 1.2, "categoria": ""}], "items[0].categoria"),
        (["PAPAS"], "items[0]"),
    ],
)
def test_calculate_rejects_malformed_items(items, message):
    aggregator = PromotionAggregator(FakePricingOracle())

    with pytest.raises(ValidationError) as excinfo:
        aggregator.calculate(0.3, items)

    assert message in str(excinfo.value)

def test_calculate_surfaces_oracle_failure_as_upstream_error():
    oracle = FakePricingOracle(fail_on="TOTOPOS")
    aggregator = PromotionAggregator(oracle)
    items = [{"elasticidad": 1.5, "categoria": "PAPAS"}, {"elasticidad": 1.8, "categoria": "TOTOPOS"}]

    with pytest.raises(UpstreamError):
        aggregator.calculate(0.41, items)

def test_calculate_wraps_unexpected_oracle_errors():
    oracle = FakePricingOracle(fail_on="PAPAS", error=ConnectionError("socket closed"))
    aggregator = PromotionAggregator(oracle)

    with pytest.raises(UpstreamError) as excinfo:
        aggregator.calculate(0.2, [{"elasticidad": 1.5, "categoria": "PAPAS"}])

    assert "PAPAS" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, ConnectionError)

def test_calculate_with_workers_keeps_item_order():
    items = random_items(6)
    oracle = FakePricingOracle(delays={items[0]["categoria"]: 0.05})
    aggregator = PromotionAggregator(oracle, max_workers=4)

    result = aggregator.calculate(0.25, items)

    assert list(result.items) == [item["categoria"] for item in items]

def test_calculate_rejects_elasticity_too_large_for_float():
    """
    Un entero que no cabe en un float es entrada malformada, no un error interno.
    """
    oracle = FakePricingOracle()
    aggregator = PromotionAggregator(oracle)

    with pytest.raises(ValidationError) as excinfo:
        aggregator.calculate(0.3, [{"elasticidad": 10**400, "categoria": "X"}])

    assert "items[0].elasticidad must be a number" in str(excinfo.value)
    assert oracle.calls == []
