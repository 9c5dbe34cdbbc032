import logging
from collections import defaultdict
from functools import wraps

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError

from app.utils.responses import error_response, validation_error_response

logger = logging.getLogger('postboard.api.errors')

REQUIRED = 'The {field} field is required.'

# Mensajes por tipo de error de pydantic
MESSAGES = {
    'missing': REQUIRED,
    'required': REQUIRED,
    'string_too_short': REQUIRED,
    'string_type': 'The {field} field must be a string.',
    'string_too_long': 'The {field} field must not be greater than {max_length} characters.',
    'boolean': 'The {field} field must be true or false.',
    'json_invalid': 'The request body must be valid JSON.',
    'model_type': 'The request body must be a JSON object.',
    'model_attributes_type': 'The request body must be a JSON object.',
    'dict_type': 'The request body must be a JSON object.',
}


def format_validation_errors(errors) -> dict:
    """
    Convierte los errores de pydantic en un mapa {campo: [mensajes]}.
    Los errores que no apuntan a un campo se agrupan bajo "body".
    """
    result = defaultdict(list)
    for err in errors:
        loc = [part for part in err.get('loc', ()) if part != 'body']
        field = str(loc[0]) if loc and isinstance(loc[0], str) else 'body'
        template = MESSAGES.get(err.get('type'))
        if template is None:
            message = err.get('msg', 'Invalid value.')
        else:
            message = template.format(field=field.replace('_', ' '), **err.get('ctx', {}))
        if message not in result[field]:
            result[field].append(message)
    return dict(result)


def failure_boundary(message: str):
    """
    Decorador para endpoints: cualquier fallo de persistencia se convierte en
    una respuesta 500 con el error original, después de hacer rollback.
    Los errores de validación y los 404 los resuelve antes el endpoint.
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except SQLAlchemyError as e:
                db = kwargs.get('db')
                if db is not None:
                    db.rollback()
                logger.exception(f'{func.__name__} failed: {e}')
                return error_response(message, 500, error=str(e))
        return wrapper
    return decorator


async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = format_validation_errors(exc.errors())
    logger.info(f'{request.method} {request.url.path} rejected: {errors}')
    return validation_error_response(errors)


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f'Unhandled error on {request.method} {request.url.path}')
    return error_response('Internal server error', 500, error=str(exc))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
