# vemio/services/data_sources.py

"""
Colaboradores externos del motor de agregación.

El motor solo conoce estas interfaces; las implementaciones de aquí las
resuelven contra el Postgres administrado. Cada llamada abre su propia
sesión corta, así que varias llamadas pueden correr en hilos distintos
sin compartir conexión.
"""

import logging
from decimal import Decimal
from typing import Any, Callable, List, Protocol, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .. import crud
from ..crud import crud_descuento, crud_valorizacion
from ..models import Valorizacion
from ..schemas import CategoryStat, DescuentoMetrics, ValorizacionItem
from .errors import UpstreamError, ValidationError

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], Session]


class PricingOracle(Protocol):
    def compute(self, descuento: float, elasticidad: float, categoria: str) -> DescuentoMetrics: ...


class RiskDataSource(Protocol):
    def fetch(self, category: str) -> ValorizacionItem: ...


class CategoryStatsSource(Protocol):
    def fetch(self, category: str) -> CategoryStat: ...

    def top_expiring(self, limit: int) -> List[Tuple[str, float]]: ...

    def available_categories(self) -> List[str]: ...


def _as_float(value: Any, *, column: str, categoria: str) -> float:
    # Solo NULL se lee como 0; cualquier otro valor no numérico es una falla de la base
    if value is None:
        return 0.0
    if isinstance(value, Decimal):
        return float(value)
    try:
        return float(value)
    except (TypeError, ValueError):
        raise UpstreamError(
            f"Non-numeric value {value!r} in column '{column}' of discount calculation for '{categoria}'"
        )


class DatabasePricingOracle:
    """PricingOracle respaldado por gonac.calcular_metricas_descuento."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def compute(self, descuento: float, elasticidad: float, categoria: str) -> DescuentoMetrics:
        try:
            with self.session_factory() as db:
                row = crud_descuento.calcular_metricas_descuento(
                    db, descuento=descuento, elasticidad=elasticidad, categoria=categoria
                )
        except SQLAlchemyError as e:
            logger.warning("calcular_metricas_descuento failed for %s @ %s: %s", categoria, descuento, e)
            raise UpstreamError(
                f"Database error calculating discount metrics for '{categoria}' "
                f"(descuento={descuento}): {e}"
            ) from e

        if not row:
            raise UpstreamError(
                f"No data returned from discount calculation for '{categoria}' (descuento={descuento})"
            )

        return DescuentoMetrics(**{
            field: _as_float(row.get(field), column=field, categoria=categoria)
            for field in DescuentoMetrics.model_fields
        })


class DatabaseRiskDataSource:
    """RiskDataSource sobre las tablas *_detalle del esquema gonac."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def fetch(self, category: str) -> ValorizacionItem:
        try:
            valorizacion = Valorizacion(category)
        except ValueError:
            raise ValidationError(
                f"Invalid valorizacion type: {category!r}. "
                f"Expected one of {[v.value for v in Valorizacion]}"
            )

        try:
            with self.session_factory() as db:
                tiendas, impacto = crud_valorizacion.por_valorizacion[valorizacion].valorizar(db)
        except SQLAlchemyError as e:
            logger.warning("%s query failed: %s", valorizacion.value, e)
            raise UpstreamError(f"{valorizacion.value} query error: {e}") from e

        return ValorizacionItem(valorizacion=valorizacion.value, tiendas=tiendas, impacto=impacto)


class DatabaseCategoryStatsSource:
    """Conteos por categoría sobre el catálogo y las métricas tienda-sku."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def fetch(self, category: str) -> CategoryStat:
        try:
            with self.session_factory() as db:
                unique_products, unique_stores = crud.store_sku_metrics.get_category_stats(db, category=category)
        except SQLAlchemyError as e:
            logger.warning("category stats query failed for %s: %s", category, e)
            raise UpstreamError(f"Error fetching stats for category '{category}': {e}") from e
        return CategoryStat(category=category, unique_products=unique_products, unique_stores=unique_stores)

    def top_expiring(self, limit: int) -> List[Tuple[str, float]]:
        try:
            with self.session_factory() as db:
                return crud_descuento.get_top_categorias_con_caducidad(db, limit=limit)
        except SQLAlchemyError as e:
            logger.warning("expiration ranking query failed: %s", e)
            raise UpstreamError(f"Error fetching expiration data: {e}") from e

    def available_categories(self) -> List[str]:
        try:
            with self.session_factory() as db:
                return crud_descuento.get_categorias_disponibles(db)
        except SQLAlchemyError as e:
            logger.warning("category catalog query failed: %s", e)
            raise UpstreamError(f"Error fetching categories: {e}") from e
