from datetime import datetime, timezone
from typing import Any, Dict, Generic, List, TypeVar

from pydantic import BaseModel, ConfigDict, Field

# Estos son los "schemas" que la API devuelve. NO son los modelos de
# SQLAlchemy: son resultados transitorios, construidos en cada petición.

# --- Promociones / descuentos ---

class PromocionItem(BaseModel):
    elasticidad: float
    categoria: str

    model_config = ConfigDict(frozen=True)

# Resultado crudo de gonac.calcular_metricas_descuento
class DescuentoMetrics(BaseModel):
    inventario_inicial_total: float = 0.0
    ventas_plus: float = 0.0
    venta_original: float = 0.0
    costo: float = 0.0
    valor: float = 0.0
    reduccion: float = 0.0

    model_config = ConfigDict(frozen=True)

# Rollup por categoría: la métrica más los parámetros que la produjeron
class PromocionMetrics(DescuentoMetrics):
    descuento: float
    elasticidad: float
    categoria: str

class PromocionConfig(BaseModel):
    descuento_maximo: float
    items: List[PromocionItem]

    model_config = ConfigDict(frozen=True)

class PromocionResponse(BaseModel):
    items: Dict[str, PromocionMetrics]
    config: PromocionConfig

    model_config = ConfigDict(frozen=True)

# Una fila de la matriz de escenarios (un descuento)
class EscenarioDescuento(BaseModel):
    descuento: float
    rollups: Dict[str, PromocionMetrics]
    totales: DescuentoMetrics

    model_config = ConfigDict(frozen=True)

# --- Cuerpos de petición ---
# Tipos permisivos: la validación de forma la hace el motor
# y vuelve como 400 con su mensaje.

class CalcularPromocionRequest(BaseModel):
    descuento: Any = None
    items: Any = None

class CompararDescuentosRequest(BaseModel):
    descuentos: Any = None
    items: Any = None

class CategoryStatsRequest(BaseModel):
    categories: Any = None

# --- Valorización de riesgo ---

class ValorizacionItem(BaseModel):
    valorizacion: str = ""
    tiendas: int = Field(0, ge=0)
    impacto: float = Field(0.0, ge=0)

    model_config = ConfigDict(frozen=True)

class ValorizacionTotals(BaseModel):
    tiendas: int = 0
    impacto: float = 0.0

    model_config = ConfigDict(frozen=True)

class ValorizacionSummary(BaseModel):
    agotado: ValorizacionTotals
    caducidad: ValorizacionTotals
    sin_ventas: ValorizacionTotals = Field(alias="sinVentas")
    total: ValorizacionTotals

    model_config = ConfigDict(frozen=True, populate_by_name=True)

class ValorizacionPercentage(ValorizacionItem):
    percentage: float = 0.0

class ValorizacionResponse(BaseModel):
    data: List[ValorizacionItem]
    total_tiendas: int = 0
    total_impacto: float = 0.0

    model_config = ConfigDict(frozen=True)

# --- Estadísticas por categoría ---

class CategoryStat(BaseModel):
    category: str
    unique_products: int = Field(0, ge=0)
    unique_stores: int = Field(0, ge=0)

    model_config = ConfigDict(frozen=True)

class CategoryStatsResponse(BaseModel):
    stats: List[CategoryStat]
    total_products: int = 0
    total_stores: int = 0

    model_config = ConfigDict(frozen=True)

class CategoriaConCaducidad(BaseModel):
    category: str
    impacto: float = 0.0
    percentage: float = 0.0

    model_config = ConfigDict(frozen=True)

class TopCategoriasCaducidadResponse(BaseModel):
    categorias: List[CategoriaConCaducidad]
    total_impacto: float = 0.0

    model_config = ConfigDict(frozen=True)

# --- Envoltorio de respuesta de la API ---

DataT = TypeVar("DataT")

class ApiResponse(BaseModel, Generic[DataT]):
    success: bool = True
    data: DataT
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
