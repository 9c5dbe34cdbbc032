import logging
from datetime import datetime, timezone

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import (
    API_HOST,
    API_PORT,
    API_PREFIX,
    CORS_ALLOW_CREDENTIALS,
    CORS_ALLOW_HEADERS,
    CORS_ALLOW_METHODS,
    CORS_ALLOW_ORIGINS,
    LOG_LEVEL,
)
from app.database import Base, engine
from app.routers import posts
from app.utils.errors import register_exception_handlers

logging.basicConfig(level=LOG_LEVEL, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger('postboard.api.main')

# Crear tablas en la base de datos (en producción esto lo haces con Alembic)
Base.metadata.create_all(bind=engine)

# Instancia de la app FastAPI
app = FastAPI(
    title="Postboard API",
    description="API REST para gestionar artículos (CRUD de posts) 📝",
    version="1.0.0"
)

# Configurar CORS (por defecto abierto a cualquier origen, ver app/config.py)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_credentials=CORS_ALLOW_CREDENTIALS,
    allow_methods=CORS_ALLOW_METHODS,
    allow_headers=CORS_ALLOW_HEADERS,
)

register_exception_handlers(app)

# Registrar routers
app.include_router(posts.router, prefix=API_PREFIX)

# Ruta básica para verificar que la API está corriendo
@app.get(f"{API_PREFIX}/test", tags=["Health"])
def liveness():
    return {
        "success": True,
        "message": "The API is up and running!",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


def run():
    logger.info(f'Starting Postboard API on {API_HOST}:{API_PORT}')
    uvicorn.run(app, host=API_HOST, port=API_PORT, log_level=LOG_LEVEL.lower())


if __name__ == '__main__':
    run()
