from . import crud_descuento, crud_valorizacion
from .crud_descuento import store_sku_metrics
