from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

NOT_FOUND_MESSAGE = 'Post not found'
VALIDATION_MESSAGE = 'Validation error'


def success_response(message: str, data=None, status_code: int = 200) -> JSONResponse:
    body = {'success': True, 'message': message}
    if data is not None:
        body['data'] = jsonable_encoder(data)
    return JSONResponse(status_code=status_code, content=body)


def error_response(message: str, status_code: int, errors: dict | None = None, error: str | None = None) -> JSONResponse:
    body = {'success': False, 'message': message}
    if errors is not None:
        body['errors'] = errors
    if error is not None:
        body['error'] = error
    return JSONResponse(status_code=status_code, content=body)


def not_found_response() -> JSONResponse:
    return error_response(NOT_FOUND_MESSAGE, 404)


def validation_error_response(errors: dict) -> JSONResponse:
    return error_response(VALIDATION_MESSAGE, 422, errors=errors)
