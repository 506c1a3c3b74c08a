"""Lesson Quizzer relay - FastAPI Application."""

import logging
import uuid
from collections.abc import Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from quizzer import __version__
from quizzer.config import Settings, get_settings
from quizzer.errors import GenerationError, InputTooShortError, QuizzerError, TransportError
from quizzer.routers import generator_router
from quizzer.services.quiz_generator import QuizGenerator
from quizzer.services.transports import build_transport

logger = logging.getLogger(__name__)

CORS_ALLOW_HEADERS = ["authorization", "x-client-info", "apikey", "content-type"]


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def input_too_short_handler(request: Request, exc: InputTooShortError) -> JSONResponse:
    return _error(400, exc.message)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return _error(400, "Request body must be JSON with a 'text' string")


async def generation_error_handler(request: Request, exc: GenerationError) -> JSONResponse:
    logger.error(f"Generation failed ({exc.kind}): {exc.message}")
    logger.debug(f"Raw content: {exc.raw}")
    return _error(500, exc.message)


async def transport_error_handler(request: Request, exc: TransportError) -> JSONResponse:
    logger.error(f"Model endpoint failed: {exc}")
    return _error(502, "Failed to generate questions with the model provider")


async def quizzer_error_handler(request: Request, exc: QuizzerError) -> JSONResponse:
    logger.error(f"Request failed: {exc}")
    return _error(500, exc.message)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Error in generate-questions")
    return _error(500, "Internal server error")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    settings: Settings = app.state.settings
    logger.info(f"Starting {settings.app_name} relay (provider: {settings.llm_provider})")
    try:
        app.state.quiz_generator = QuizGenerator(build_transport(settings=settings), settings)
    except TransportError as e:
        logger.warning(f"Relay started without a model credential: {e}")
        app.state.quiz_generator = None

    yield

    logger.info("Shutting down...")
    if app.state.quiz_generator is not None:
        await app.state.quiz_generator.aclose()
        app.state.quiz_generator = None


def create_app(settings: Settings | None = None) -> FastAPI:
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Turns PDF handout text into a 40-question multiple-choice exam",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_exception_handler(InputTooShortError, input_too_short_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(GenerationError, generation_error_handler)
    app.add_exception_handler(TransportError, transport_error_handler)
    app.add_exception_handler(QuizzerError, quizzer_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Open CORS: the relay is called straight from the browser
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=CORS_ALLOW_HEADERS,
    )

    @app.middleware("http")
    async def request_id_middleware(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        request_id = request.headers.get("X-Request-ID", uuid.uuid4().hex[:12])
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    app.include_router(generator_router)

    @app.get("/")
    async def root():
        """Root endpoint with API info."""
        return {
            "name": settings.app_name,
            "version": __version__,
            "description": "PDF handout to 40-question exam relay",
            "docs": "/docs",
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    logging.basicConfig(level=settings.log_level)
    uvicorn.run(app, host=settings.host, port=settings.port)
