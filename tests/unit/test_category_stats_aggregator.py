# tests/unit/test_category_stats_aggregator.py

import pytest

from vemio.services.category_stats_aggregator import CategoryStatsAggregator
from vemio.services.errors import UpstreamError, ValidationError
from tests.utils.fakes import FakeCategoryStatsSource

def test_stats_totals_are_plain_sums_without_dedup(stats_source):
    """
    Un producto presente en dos categorías cuenta dos veces: los totales
    son la suma aritmética de los conteos por categoría.
    """
    result = CategoryStatsAggregator(stats_source).stats(["Papas", "Totopos"])

    assert result.total_products == result.stats[0].unique_products + result.stats[1].unique_products
    assert result.total_products == 77
    assert result.total_stores == 218

def test_stats_preserves_input_order_with_workers(stats_source):
    result = CategoryStatsAggregator(stats_source, max_workers=3).stats(["Totopos", "Mix", "Papas"])

    assert [stat.category for stat in result.stats] == ["Totopos", "Mix", "Papas"]

def test_stats_unknown_category_counts_as_zero(stats_source):
    result = CategoryStatsAggregator(stats_source).stats(["Nueva"])

    assert result.total_products == 0
    assert result.total_stores == 0

@pytest.mark.parametrize("categories", [[], None, "Papas", ["Papas", 3]])
def test_stats_rejects_invalid_categories(stats_source, categories):
    with pytest.raises(ValidationError):
        CategoryStatsAggregator(stats_source).stats(categories)

def test_stats_upstream_failure_discards_partial_results():
    source = FakeCategoryStatsSource({"Papas": (1, 1)}, fail_on="Totopos")

    with pytest.raises(UpstreamError):
        CategoryStatsAggregator(source).stats(["Papas", "Totopos"])

def test_top_expiring_uses_configured_default_limit(stats_source):
    aggregator = CategoryStatsAggregator(stats_source, default_limit=2)

    result = aggregator.top_expiring()

    assert stats_source.limits == [2]
    assert [c.category for c in result.categorias] == ["Papas", "Totopos"]
    assert result.total_impacto == 1500.0
    assert sum(c.percentage for c in result.categorias) == pytest.approx(100.0)
    assert result.categorias[0].percentage == pytest.approx(60.0)

def test_top_expiring_sorts_descending():
    source = FakeCategoryStatsSource(expiring=[("A", 1.0), ("B", 3.0), ("C", 2.0)])

    result = CategoryStatsAggregator(source).top_expiring(3)

    assert [c.category for c in result.categorias] == ["B", "C", "A"]

def test_top_expiring_with_zero_impact_has_zero_percentages():
    source = FakeCategoryStatsSource(expiring=[("A", 0.0)])

    result = CategoryStatsAggregator(source).top_expiring(1)

    assert result.categorias[0].percentage == 0.0

@pytest.mark.parametrize("limit", [0, 21, -1, True, 2.5])
def test_top_expiring_rejects_out_of_range_limit(stats_source, limit):
    with pytest.raises(ValidationError):
        CategoryStatsAggregator(stats_source, max_limit=20).top_expiring(limit)

def test_available_categories(stats_source):
    assert CategoryStatsAggregator(stats_source).available_categories() == ["Mix", "Papas", "Totopos"]
