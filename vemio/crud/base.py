# vemio/crud/base.py

from typing import Any, Generic, Iterable, Type, TypeVar
from sqlalchemy.orm import Session
from ..database import Base

# Tipo genérico para nuestro modelo SQLAlchemy
ModelType = TypeVar("ModelType", bound=Base)

class CRUDBase(Generic[ModelType]):
    """
    Clase base de consultas de solo lectura sobre un modelo SQLAlchemy.
    Las tablas del esquema gonac son pre-agregadas; aquí solo se leen.
    """
    def __init__(self, model: Type[ModelType]):
        """
        :param model: La clase del modelo SQLAlchemy (ej: models.CaducidadDetalle)
        """
        self.model = model

    def aggregate(self, db: Session, *columns: Any, filters: Iterable[Any] = ()) -> Any:
        """Ejecuta una consulta de agregados sobre el modelo y devuelve la única fila."""
        query = db.query(*columns).select_from(self.model)
        for condition in filters:
            query = query.filter(condition)
        return query.one()
