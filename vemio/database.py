from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from .core.config import settings

# "Motor" de SQLAlchemy contra el Postgres administrado
engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True)

# Fábrica de sesiones. Las consultas del motor de agregación abren
# una sesión corta por llamada (ver services/data_sources.py).
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

# Base para los modelos (solo lectura) del esquema gonac
Base = declarative_base()
