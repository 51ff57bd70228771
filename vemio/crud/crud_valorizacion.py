# vemio/crud/crud_valorizacion.py

from typing import Tuple
from sqlalchemy import distinct, func
from sqlalchemy.orm import Session

from .base import CRUDBase, ModelType
from .. import models
from ..models import Valorizacion

class CRUDDetalleRiesgo(CRUDBase[ModelType]):
    def valorizar(self, db: Session) -> Tuple[int, float]:
        """
        Tiendas distintas afectadas e impacto total de la tabla de detalle.
        Una tabla vacía devuelve (0, 0.0).
        """
        tiendas, impacto = self.aggregate(
            db,
            func.count(distinct(self.model.id_store)),
            func.coalesce(func.sum(self.model.impacto), 0),
        )
        return int(tiendas or 0), float(impacto or 0)

agotamiento = CRUDDetalleRiesgo(models.AgotamientoDetalle)
caducidad = CRUDDetalleRiesgo(models.CaducidadDetalle)
sin_ventas = CRUDDetalleRiesgo(models.SinVentasDetalle)

# Tabla de detalle por categoría de riesgo
por_valorizacion = {
    Valorizacion.AGOTADO: agotamiento,
    Valorizacion.CADUCIDAD: caducidad,
    Valorizacion.SIN_VENTAS: sin_ventas,
}
