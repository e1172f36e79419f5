from fastapi import Request
from fastapi.responses import JSONResponse

from annotator.exceptions import AppError, LexiconUnavailableError, ValidationError


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={"error": exc.code, "message": exc.message},
    )


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={"error": exc.code, "message": exc.message},
    )


async def lexicon_unavailable_handler(
    request: Request, exc: LexiconUnavailableError
) -> JSONResponse:
    return JSONResponse(
        status_code=503,
        content={"error": exc.code, "message": exc.message},
    )


def register_exception_handlers(app):
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(LexiconUnavailableError, lexicon_unavailable_handler)
    app.add_exception_handler(AppError, app_error_handler)
