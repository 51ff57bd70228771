# vemio/routers/deps.py

from fastapi import Depends, HTTPException, status

from ..core.config import settings
from ..database import SessionLocal
from ..services.category_stats_aggregator import CategoryStatsAggregator
from ..services.data_sources import (
    CategoryStatsSource,
    DatabaseCategoryStatsSource,
    DatabasePricingOracle,
    DatabaseRiskDataSource,
    PricingOracle,
    RiskDataSource,
)
from ..services.errors import EmptyInputError, EngineError, UpstreamError, ValidationError
from ..services.promotion_aggregator import PromotionAggregator
from ..services.scenario_matrix import ScenarioMatrixBuilder
from ..services.valorization_aggregator import ValorizationAggregator

# --- Colaboradores externos (los tests los sobrescriben) ---

def get_pricing_oracle() -> PricingOracle:
    return DatabasePricingOracle(SessionLocal)

def get_risk_data_source() -> RiskDataSource:
    return DatabaseRiskDataSource(SessionLocal)

def get_category_stats_source() -> CategoryStatsSource:
    return DatabaseCategoryStatsSource(SessionLocal)

# --- Servicios: la configuración entra como parámetro explícito ---

def get_promotion_aggregator(oracle: PricingOracle = Depends(get_pricing_oracle)) -> PromotionAggregator:
    return PromotionAggregator(oracle, max_workers=settings.ORACLE_MAX_WORKERS)

def get_scenario_matrix_builder(oracle: PricingOracle = Depends(get_pricing_oracle)) -> ScenarioMatrixBuilder:
    return ScenarioMatrixBuilder(oracle, max_workers=settings.ORACLE_MAX_WORKERS)

def get_valorization_aggregator(source: RiskDataSource = Depends(get_risk_data_source)) -> ValorizationAggregator:
    return ValorizationAggregator(source, max_workers=settings.ORACLE_MAX_WORKERS)

def get_category_stats_aggregator(
    source: CategoryStatsSource = Depends(get_category_stats_source),
) -> CategoryStatsAggregator:
    return CategoryStatsAggregator(
        source,
        max_workers=settings.ORACLE_MAX_WORKERS,
        default_limit=settings.TOP_CATEGORIES_DEFAULT_LIMIT,
        max_limit=settings.TOP_CATEGORIES_MAX_LIMIT,
    )

# --- Errores del motor -> HTTP ---

def to_http_exception(exc: EngineError) -> HTTPException:
    if isinstance(exc, ValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    if isinstance(exc, EmptyInputError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, UpstreamError):
        return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))
