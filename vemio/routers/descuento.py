# vemio/routers/descuento.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from .. import schemas
from ..services.category_stats_aggregator import CategoryStatsAggregator
from ..services.errors import EngineError
from ..services.promotion_aggregator import PromotionAggregator
from ..services.scenario_matrix import ScenarioMatrixBuilder
from .deps import (
    get_category_stats_aggregator,
    get_promotion_aggregator,
    get_scenario_matrix_builder,
    to_http_exception,
)

router = APIRouter(
    prefix="/descuento",
    tags=["Descuento"]
)

@router.post("", response_model=schemas.ApiResponse[schemas.PromocionResponse])
def calcular_promocion(
    body: schemas.CalcularPromocionRequest,
    aggregator: PromotionAggregator = Depends(get_promotion_aggregator)
):
    """
    Métricas de promoción para un descuento aplicado a varias categorías.

    Ejemplo: `{"descuento": 0.41, "items": [{"elasticidad": 1.5, "categoria": "PAPAS"}]}`
    """
    try:
        data = aggregator.calculate(body.descuento, body.items)
    except EngineError as e:
        raise to_http_exception(e)
    return schemas.ApiResponse(data=data)

@router.post("/comparar", response_model=schemas.ApiResponse[List[schemas.EscenarioDescuento]])
def comparar_descuentos(
    body: schemas.CompararDescuentosRequest,
    builder: ScenarioMatrixBuilder = Depends(get_scenario_matrix_builder)
):
    """
    Compara varios escenarios de descuento sobre los mismos items.
    La respuesta trae un escenario por descuento, en el orden recibido.
    """
    try:
        data = builder.compare(body.descuentos, body.items)
    except EngineError as e:
        raise to_http_exception(e)
    return schemas.ApiResponse(data=data)

@router.post("/category-stats", response_model=schemas.ApiResponse[schemas.CategoryStatsResponse])
def category_stats(
    body: schemas.CategoryStatsRequest,
    aggregator: CategoryStatsAggregator = Depends(get_category_stats_aggregator)
):
    try:
        data = aggregator.stats(body.categories)
    except EngineError as e:
        raise to_http_exception(e)
    return schemas.ApiResponse(data=data)

@router.get("/categorias-caducidad", response_model=schemas.ApiResponse[schemas.TopCategoriasCaducidadResponse])
def categorias_con_caducidad(
    limit: Optional[int] = Query(None, description="Número de categorías (por defecto, el configurado)"),
    aggregator: CategoryStatsAggregator = Depends(get_category_stats_aggregator)
):
    """Categorías con mayor impacto por productos próximos a caducar."""
    try:
        data = aggregator.top_expiring(limit)
    except EngineError as e:
        raise to_http_exception(e)
    return schemas.ApiResponse(data=data)

@router.get("/categorias", response_model=schemas.ApiResponse[List[str]])
def categorias_disponibles(
    aggregator: CategoryStatsAggregator = Depends(get_category_stats_aggregator)
):
    try:
        data = aggregator.available_categories()
    except EngineError as e:
        raise to_http_exception(e)
    return schemas.ApiResponse(data=data)
