# vemio/services/scenario_matrix.py

import logging
from functools import partial
from typing import Any, Iterable, List

from ..schemas import DescuentoMetrics, EscenarioDescuento, PromocionMetrics
from .data_sources import PricingOracle
from .dispatch import run_ordered
from .promotion_aggregator import call_oracle, fold_rollups
from .validation import validate_discounts, validate_items

logger = logging.getLogger(__name__)

def sum_rollups(rollups: Iterable[PromocionMetrics]) -> DescuentoMetrics:
    """
    Totales de un escenario. `reduccion` no se suma: se recalcula como
    ventas_plus / inventario_inicial_total * 100 sobre los totales.
    """
    inventario = ventas_plus = venta_original = costo = valor = 0.0
    for rollup in rollups:
        inventario += rollup.inventario_inicial_total
        ventas_plus += rollup.ventas_plus
        venta_original += rollup.venta_original
        costo += rollup.costo
        valor += rollup.valor

    return DescuentoMetrics(
        inventario_inicial_total=inventario,
        ventas_plus=ventas_plus,
        venta_original=venta_original,
        costo=costo,
        valor=valor,
        reduccion=(ventas_plus / inventario) * 100 if inventario else 0.0,
    )

class ScenarioMatrixBuilder:
    """
    Matriz de comparación descuento x item.

    Las llamadas al oráculo son independientes y pueden ir en paralelo,
    pero el plegado siempre recorre descuento por descuento y, dentro de
    cada uno, item por item. Así el "último gana" en categorías repetidas
    da el mismo resultado con o sin concurrencia.
    """

    def __init__(self, oracle: PricingOracle, *, max_workers: int = 1):
        self.oracle = oracle
        self.max_workers = max_workers

    def compare(self, discount_rates: Any, items: Any) -> List[EscenarioDescuento]:
        descuentos = validate_discounts(discount_rates)
        promo_items = validate_items(items)

        calls = [
            partial(call_oracle, self.oracle, descuento, item)
            for descuento in descuentos
            for item in promo_items
        ]
        logger.debug("Comparing %d scenarios x %d items", len(descuentos), len(promo_items))
        resultados = run_ordered(calls, max_workers=self.max_workers)

        matriz = []
        n = len(promo_items)
        for index, descuento in enumerate(descuentos):
            rollups = fold_rollups(descuento, promo_items, resultados[index * n:(index + 1) * n])
            matriz.append(
                EscenarioDescuento(descuento=descuento, rollups=rollups, totales=sum_rollups(rollups.values()))
            )
        return matriz
