# vemio/services/errors.py

# Excepciones del motor de agregación. Los routers las traducen a HTTPException.

class EngineError(Exception):
    """Base de todos los errores del motor."""
    pass

class ValidationError(EngineError, ValueError):
    """Entrada malformada o fuera de rango. Error del llamador, nunca se reintenta."""
    pass

class UpstreamError(EngineError, RuntimeError):
    """Falla de un colaborador externo (base de datos). No se reintenta."""
    pass

class EmptyInputError(EngineError, ValueError):
    """Colección vacía sin un valor por defecto razonable."""
    pass
