# vemio/main.py

import logging
import time

from fastapi import Depends, FastAPI, Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .core.config import settings
from .database import get_db
from .routers import descuento, valorizacion

# Configurar logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Vemio Analytics API",
    description="Escenarios de promoción y valorización de riesgo sobre el esquema gonac."
)

@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Registra cada petición con su tiempo de respuesta."""
    start_time = time.time()
    logger.info(f"Request: {request.method} {request.url.path}")

    response = await call_next(request)

    process_time = time.time() - start_time
    logger.info(f"Response: {response.status_code} - Time: {process_time:.3f}s")
    response.headers["X-Process-Time"] = str(process_time)
    return response

app.include_router(descuento.router, prefix=settings.API_V1_STR)
app.include_router(valorizacion.router, prefix=settings.API_V1_STR)

@app.get("/")
def read_root():
    """
    Endpoint raíz. Solo confirma que la API está arriba.
    """
    return {"service": "Vemio Analytics API", "status": "operational"}

@app.get(f"{settings.API_V1_STR}/health")
def health_check(db: Session = Depends(get_db)):
    """Estado de la API y de la conexión a la base de datos."""
    try:
        db.execute(text("SELECT 1"))
        database = "connected"
    except SQLAlchemyError as e:
        logger.warning(f"DB health check failed: {e}")
        database = "disconnected"

    return {
        "status": "healthy" if database == "connected" else "degraded",
        "checks": {"api": "operational", "database": database},
    }

if __name__ == "__main__":
    import uvicorn

    # Solo para desarrollo local. En producción: uvicorn vemio.main:app
    uvicorn.run("vemio.main:app", host="0.0.0.0", port=8000, log_level=settings.LOG_LEVEL.lower())
