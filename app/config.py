import os


def _csv(value):
    return [item.strip() for item in value.split(',') if item.strip()]


# Base de datos: SQLite local por defecto, PostgreSQL con el extra "postgres"
DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite:///./posts.db')

API_PREFIX = '/api'
API_HOST = os.getenv('API_HOST', '127.0.0.1')
API_PORT = int(os.getenv('API_PORT', '8000'))

LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

# Cantidad de posts por página en el listado
PAGE_SIZE = 10

# CORS: por defecto se aceptan todos los orígenes, métodos y headers (modo desarrollo)
CORS_ALLOW_ORIGINS = _csv(os.getenv('CORS_ALLOW_ORIGINS', '*'))
CORS_ALLOW_METHODS = _csv(os.getenv('CORS_ALLOW_METHODS', '*'))
CORS_ALLOW_HEADERS = _csv(os.getenv('CORS_ALLOW_HEADERS', '*'))
CORS_ALLOW_CREDENTIALS = os.getenv('CORS_ALLOW_CREDENTIALS', 'false').lower() in ('true', '1', 'yes')
