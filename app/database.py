from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from app.config import DATABASE_URL


def _engine_options(url):
    if not url.startswith('sqlite'):
        return {}

    options = {'connect_args': {'check_same_thread': False}}
    # SQLite en memoria: todas las sesiones comparten la misma conexión
    if url in ('sqlite://', 'sqlite:///:memory:'):
        options['poolclass'] = StaticPool
    return options


# Crea el motor de conexión (engine)
engine = create_engine(DATABASE_URL, **_engine_options(DATABASE_URL))

# Crea la fábrica de sesiones
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base para los modelos
Base = declarative_base()

# Dependencia para obtener sesión de base de datos en endpoints
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
