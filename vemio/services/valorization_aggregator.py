# vemio/services/valorization_aggregator.py

import logging
from typing import Any, Iterable, List, Optional, Sequence

from ..models import Valorizacion
from ..schemas import (
    ValorizacionItem,
    ValorizacionPercentage,
    ValorizacionResponse,
    ValorizacionSummary,
    ValorizacionTotals,
)
from .data_sources import RiskDataSource
from .dispatch import run_ordered
from .errors import EmptyInputError, ValidationError

logger = logging.getLogger(__name__)

def _as_rows(rows: Iterable[Any]) -> List[ValorizacionItem]:
    return [row if isinstance(row, ValorizacionItem) else ValorizacionItem.model_validate(row) for row in rows]

def _find(rows: Sequence[ValorizacionItem], valorizacion: Valorizacion) -> ValorizacionTotals:
    # Fila ausente => ceros; filas repetidas => la primera
    for row in rows:
        if row.valorizacion == valorizacion.value:
            return ValorizacionTotals(tiendas=row.tiendas, impacto=row.impacto)
    return ValorizacionTotals()

class ValorizationAggregator:
    """
    Agregados de las categorías de riesgo fijas: Agotado, Caducidad y Sin Ventas.
    """

    def __init__(self, source: RiskDataSource, *, max_workers: int = 1):
        self.source = source
        self.max_workers = max_workers

    # --- Reducciones puras ---

    @staticmethod
    def summarize(rows: Iterable[Any]) -> ValorizacionSummary:
        """
        Resumen con las tres categorías siempre presentes.
        El total suma exactamente esas tres, no las filas crudas.
        """
        rows = _as_rows(rows)
        agotado = _find(rows, Valorizacion.AGOTADO)
        caducidad = _find(rows, Valorizacion.CADUCIDAD)
        sin_ventas = _find(rows, Valorizacion.SIN_VENTAS)
        return ValorizacionSummary(
            agotado=agotado,
            caducidad=caducidad,
            sin_ventas=sin_ventas,
            total=ValorizacionTotals(
                tiendas=agotado.tiendas + caducidad.tiendas + sin_ventas.tiendas,
                impacto=agotado.impacto + caducidad.impacto + sin_ventas.impacto,
            ),
        )

    @staticmethod
    def percentages(rows: Iterable[Any]) -> List[ValorizacionPercentage]:
        """Participación de cada fila cruda en el impacto total (0 si el total es 0)."""
        rows = _as_rows(rows)
        total_impacto = sum(row.impacto for row in rows)
        return [
            ValorizacionPercentage(
                **row.model_dump(),
                percentage=(row.impacto / total_impacto) * 100 if total_impacto > 0 else 0.0,
            )
            for row in rows
        ]

    @staticmethod
    def most_critical(rows: Iterable[Any]) -> ValorizacionItem:
        """Fila con mayor impacto; en empate gana la primera."""
        rows = _as_rows(rows)
        if not rows:
            raise EmptyInputError("Cannot select the most critical valorizacion from an empty set of rows")

        critical = rows[0]
        for row in rows[1:]:
            if row.impacto > critical.impacto:
                critical = row
        return critical

    # --- Consultas a la fuente de riesgo ---

    def get_valorizacion(self) -> ValorizacionResponse:
        data = run_ordered(
            [lambda v=v: self.source.fetch(v.value) for v in Valorizacion],
            max_workers=self.max_workers,
        )
        return ValorizacionResponse(
            data=data,
            total_tiendas=sum(item.tiendas for item in data),
            total_impacto=sum(item.impacto for item in data),
        )

    def get_by_type(self, valorizacion: Optional[str]) -> ValorizacionItem:
        if valorizacion not in {v.value for v in Valorizacion}:
            raise ValidationError(
                f"Invalid valorizacion type: {valorizacion!r}. "
                f"Expected one of {[v.value for v in Valorizacion]}"
            )
        return self.source.fetch(valorizacion)

    def get_summary(self) -> ValorizacionSummary:
        return self.summarize(self.get_valorizacion().data)

    def get_percentages(self) -> List[ValorizacionPercentage]:
        return self.percentages(self.get_valorizacion().data)

    def get_most_critical(self) -> ValorizacionItem:
        return self.most_critical(self.get_valorizacion().data)
