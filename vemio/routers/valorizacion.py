# vemio/routers/valorizacion.py

from typing import Any, Literal, Optional

from fastapi import APIRouter, Depends, Query

from .. import schemas
from ..services.errors import EngineError
from ..services.valorization_aggregator import ValorizationAggregator
from .deps import get_valorization_aggregator, to_http_exception

router = APIRouter(
    prefix="/valorizacion",
    tags=["Valorizacion"]
)

@router.get("", response_model=schemas.ApiResponse[Any])
def read_valorizacion(
    format: Literal["default", "summary", "percentages", "critical"] = "default",
    type: Optional[str] = Query(None, description="Agotado | Caducidad | Sin Ventas"),
    aggregator: ValorizationAggregator = Depends(get_valorization_aggregator)
):
    """
    Valorización de riesgo (Agotado, Caducidad, Sin Ventas).

    - `type`: devuelve solo esa categoría (tiene prioridad sobre `format`).
    - `format=summary`: resumen con las tres categorías y el total.
    - `format=percentages`: participación de cada categoría en el impacto.
    - `format=critical`: la categoría de mayor impacto.
    """
    try:
        if type is not None:
            data = aggregator.get_by_type(type)
        elif format == "summary":
            data = aggregator.get_summary()
        elif format == "percentages":
            data = aggregator.get_percentages()
        elif format == "critical":
            data = aggregator.get_most_critical()
        else:
            data = aggregator.get_valorizacion()
    except EngineError as e:
        raise to_http_exception(e)
    return schemas.ApiResponse(data=data)
