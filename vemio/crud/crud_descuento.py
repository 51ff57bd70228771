# vemio/crud/crud_descuento.py

from typing import Any, List, Mapping, Optional, Tuple
from sqlalchemy import distinct, func, text
from sqlalchemy.orm import Session

from .base import CRUDBase
from .. import models
from ..core.config import settings

# Cada función hace UNA operación contra la base; sin commits (todo es lectura).

def calcular_metricas_descuento(
    db: Session, *, descuento: float, elasticidad: float, categoria: str
) -> Optional[Mapping[str, Any]]:
    """
    Invoca gonac.calcular_metricas_descuento(p_descuento, p_elasticidad, p_categoria).
    La función devuelve una sola fila; None si no devolvió nada.
    """
    stmt = text(
        f"SELECT * FROM {settings.DB_SCHEMA}.calcular_metricas_descuento"
        "(:p_descuento, :p_elasticidad, :p_categoria)"
    )
    result = db.execute(
        stmt,
        {"p_descuento": descuento, "p_elasticidad": elasticidad, "p_categoria": categoria},
    )
    return result.mappings().first()

def get_categorias_disponibles(db: Session) -> List[str]:
    rows = (
        db.query(distinct(models.CatProduct.category))
        .filter(models.CatProduct.category.isnot(None))
        .order_by(models.CatProduct.category)
        .all()
    )
    return [row[0] for row in rows]

def get_top_categorias_con_caducidad(db: Session, *, limit: int) -> List[Tuple[str, float]]:
    """Categorías ordenadas por impacto de caducidad (descendente)."""
    impacto = func.coalesce(func.sum(models.CaducidadDetalle.impacto), 0).label("impacto")
    rows = (
        db.query(models.CatProduct.category, impacto)
        .select_from(models.CaducidadDetalle)
        .join(models.CatProduct, models.CatProduct.sku == models.CaducidadDetalle.sku)
        .filter(models.CatProduct.category.isnot(None))
        .group_by(models.CatProduct.category)
        .order_by(impacto.desc())
        .limit(limit)
        .all()
    )
    return [(category, float(total or 0)) for category, total in rows]

class CRUDStoreSkuMetrics(CRUDBase[models.StoreSkuMetrics]):
    def get_category_stats(self, db: Session, *, category: str) -> Tuple[int, int]:
        """Productos (sku) y tiendas distintas con inventario en la categoría."""
        query = (
            db.query(
                func.count(distinct(self.model.sku)),
                func.count(distinct(self.model.id_store)),
            )
            .select_from(self.model)
            .join(models.CatProduct, models.CatProduct.sku == self.model.sku)
            .filter(models.CatProduct.category == category)
        )
        unique_products, unique_stores = query.one()
        return int(unique_products or 0), int(unique_stores or 0)

store_sku_metrics = CRUDStoreSkuMetrics(models.StoreSkuMetrics)
