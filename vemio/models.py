# vemio/models.py

import enum
from sqlalchemy import Column, Integer, String, Numeric, Date

from .core.config import settings
# Importamos la Base de nuestro database.py
from .database import Base

# --- ENUMS ---

class Valorizacion(str, enum.Enum):
    """Conjunto cerrado de categorías de riesgo."""
    AGOTADO = "Agotado"
    CADUCIDAD = "Caducidad"
    SIN_VENTAS = "Sin Ventas"

# --- CATÁLOGOS ---
# Todas las tablas son de solo lectura: las llenan los procesos del
# esquema gonac, la aplicación nunca escribe en ellas.

class CatProduct(Base):
    __tablename__ = "core_cat_product"
    __table_args__ = {"schema": settings.DB_SCHEMA}

    sku = Column(String, primary_key=True)
    product_name = Column(String)
    category = Column(String, index=True)

class StoreSkuMetrics(Base):
    __tablename__ = "core_store_sku_metrics"
    __table_args__ = {"schema": settings.DB_SCHEMA}

    id_store = Column(String, primary_key=True)
    sku = Column(String, primary_key=True)
    inventario_inicial = Column(Numeric)
    precio_sku_promedio = Column(Numeric)

# --- DETALLE DE RIESGO (una tabla por valorización) ---

class DetalleRiesgoMixin:
    """Columnas comunes a las tablas *_detalle."""

    __table_args__ = {"schema": settings.DB_SCHEMA}

    id_store = Column(String, primary_key=True)
    sku = Column(String, primary_key=True)
    impacto = Column(Numeric)

class AgotamientoDetalle(DetalleRiesgoMixin, Base):
    __tablename__ = "agotamiento_detalle"

    segment = Column(String)
    dias_inventario = Column(Integer)
    detectado = Column(String)

class CaducidadDetalle(DetalleRiesgoMixin, Base):
    __tablename__ = "caducidad_detalle"

    segment = Column(String)
    fecha_caducidad = Column(Date)
    inventario_remanente = Column(Numeric)
    detectado = Column(String)

class SinVentasDetalle(DetalleRiesgoMixin, Base):
    __tablename__ = "sin_ventas_detalle"
