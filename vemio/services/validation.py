# vemio/services/validation.py

import math
from typing import Any, List, Mapping

from ..schemas import PromocionItem
from .errors import ValidationError

def _is_number(value: Any) -> bool:
    # bool es subclase de int, pero no es un número válido aquí
    return isinstance(value, (int, float)) and not isinstance(value, bool)

def validate_discount(value: Any, *, field: str = "descuento") -> float:
    """Un descuento es una fracción en [0, 1] (0.41 = 41%)."""
    if not _is_number(value):
        raise ValidationError(f"{field} is required and must be a number")
    if not 0 <= value <= 1:
        raise ValidationError(f"{field} must be between 0 and 1 (got {value})")
    return float(value)

def validate_discounts(values: Any) -> List[float]:
    if not isinstance(values, (list, tuple)) or len(values) == 0:
        raise ValidationError("descuentos must be a non-empty array of numbers")
    return [validate_discount(value, field=f"descuentos[{index}]") for index, value in enumerate(values)]

def validate_items(items: Any) -> List[PromocionItem]:
    """
    Acepta PromocionItem o diccionarios {elasticidad, categoria}.
    El orden de entrada se conserva.
    """
    if not isinstance(items, (list, tuple)) or len(items) == 0:
        raise ValidationError("items must be a non-empty array")

    validated = []
    for index, item in enumerate(items):
        if isinstance(item, PromocionItem):
            elasticidad, categoria = item.elasticidad, item.categoria
        elif isinstance(item, Mapping):
            elasticidad, categoria = item.get("elasticidad"), item.get("categoria")
        else:
            raise ValidationError(
                f"items[{index}] must have elasticidad (number) and categoria (string)"
            )

        if not _is_number(elasticidad):
            raise ValidationError(f"items[{index}].elasticidad must be a number")
        try:
            elasticidad = float(elasticidad)
        except OverflowError:
            # int demasiado grande para un float
            raise ValidationError(f"items[{index}].elasticidad must be a number")
        if not math.isfinite(elasticidad):
            raise ValidationError(f"items[{index}].elasticidad must be a number")
        if elasticidad <= 0:
            raise ValidationError(f"items[{index}].elasticidad must be greater than 0 (got {elasticidad})")
        if not isinstance(categoria, str) or not categoria:
            raise ValidationError(f"items[{index}].categoria must be a non-empty string")

        validated.append(PromocionItem(elasticidad=elasticidad, categoria=categoria))
    return validated

def validate_categories(categories: Any) -> List[str]:
    if not isinstance(categories, (list, tuple)) or len(categories) == 0:
        raise ValidationError("categories must be a non-empty array of strings")
    for index, category in enumerate(categories):
        if not isinstance(category, str):
            raise ValidationError(f"categories[{index}] must be a string")
    return list(categories)
