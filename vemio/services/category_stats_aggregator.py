# vemio/services/category_stats_aggregator.py

import logging
from typing import Any, List, Optional

from ..schemas import CategoriaConCaducidad, CategoryStat, CategoryStatsResponse, TopCategoriasCaducidadResponse
from .data_sources import CategoryStatsSource
from .dispatch import run_ordered
from .errors import ValidationError
from .validation import validate_categories

logger = logging.getLogger(__name__)

class CategoryStatsAggregator:
    def __init__(
        self,
        source: CategoryStatsSource,
        *,
        max_workers: int = 1,
        default_limit: int = 2,
        max_limit: int = 20,
    ):
        self.source = source
        self.max_workers = max_workers
        self.default_limit = default_limit
        self.max_limit = max_limit

    def stats(self, categories: Any) -> CategoryStatsResponse:
        """
        Productos y tiendas únicos por categoría, y la suma de todas.

        NOTA: los totales NO eliminan duplicados entre categorías; un producto
        o tienda que aparece en dos categorías cuenta dos veces. Se asume que
        las categorías son disjuntas para el negocio.
        """
        categorias = validate_categories(categories)

        stats: List[CategoryStat] = run_ordered(
            [lambda c=c: self.source.fetch(c) for c in categorias],
            max_workers=self.max_workers,
        )
        return CategoryStatsResponse(
            stats=stats,
            total_products=sum(stat.unique_products for stat in stats),
            total_stores=sum(stat.unique_stores for stat in stats),
        )

    def top_expiring(self, limit: Optional[int] = None) -> TopCategoriasCaducidadResponse:
        """Categorías con mayor impacto por caducidad, de mayor a menor."""
        if limit is None:
            limit = self.default_limit
        if isinstance(limit, bool) or not isinstance(limit, int) or not 1 <= limit <= self.max_limit:
            raise ValidationError(f"Limit must be between 1 and {self.max_limit}")

        rows = sorted(self.source.top_expiring(limit), key=lambda row: row[1], reverse=True)[:limit]
        total_impacto = sum(impacto for _, impacto in rows)
        return TopCategoriasCaducidadResponse(
            categorias=[
                CategoriaConCaducidad(
                    category=category,
                    impacto=impacto,
                    percentage=(impacto / total_impacto) * 100 if total_impacto > 0 else 0.0,
                )
                for category, impacto in rows
            ],
            total_impacto=total_impacto,
        )

    def available_categories(self) -> List[str]:
        return self.source.available_categories()
