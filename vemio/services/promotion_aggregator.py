# vemio/services/promotion_aggregator.py

import logging
from functools import partial
from typing import Any, Dict, Sequence

from ..schemas import DescuentoMetrics, PromocionConfig, PromocionItem, PromocionMetrics, PromocionResponse
from .data_sources import PricingOracle
from .dispatch import run_ordered
from .errors import UpstreamError
from .validation import validate_discount, validate_items

logger = logging.getLogger(__name__)

def call_oracle(oracle: PricingOracle, descuento: float, item: PromocionItem) -> DescuentoMetrics:
    """Una llamada al oráculo; cualquier falla sale como UpstreamError."""
    try:
        return oracle.compute(descuento, item.elasticidad, item.categoria)
    except UpstreamError:
        raise
    except Exception as e:
        logger.warning("Pricing oracle failed for %s @ %s: %s", item.categoria, descuento, e)
        raise UpstreamError(
            f"Pricing oracle failed for categoria '{item.categoria}' (descuento={descuento}): {e}"
        ) from e

def fold_rollups(
    descuento: float, items: Sequence[PromocionItem], metricas: Sequence[DescuentoMetrics]
) -> Dict[str, PromocionMetrics]:
    """
    Arma el mapa categoria -> rollup en el orden de los items.
    Si dos items comparten categoría, el último gana.
    """
    rollups: Dict[str, PromocionMetrics] = {}
    for item, metrica in zip(items, metricas):
        rollups[item.categoria] = PromocionMetrics(
            **metrica.model_dump(),
            descuento=descuento,
            elasticidad=item.elasticidad,
            categoria=item.categoria,
        )
    return rollups

class PromotionAggregator:
    """Un descuento aplicado a N items: una llamada al oráculo por item."""

    def __init__(self, oracle: PricingOracle, *, max_workers: int = 1):
        self.oracle = oracle
        self.max_workers = max_workers

    def calculate(self, discount: Any, items: Any) -> PromocionResponse:
        descuento = validate_discount(discount)
        promo_items = validate_items(items)

        metricas = run_ordered(
            [partial(call_oracle, self.oracle, descuento, item) for item in promo_items],
            max_workers=self.max_workers,
        )

        return PromocionResponse(
            items=fold_rollups(descuento, promo_items, metricas),
            # Se devuelve tal cual lo pidió el llamador, sin reescalar a porcentaje
            config=PromocionConfig(descuento_maximo=discount, items=promo_items),
        )
