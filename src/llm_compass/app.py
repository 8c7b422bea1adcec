"""LLM Compass FastAPI application."""
from typing import Callable, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from .api.middleware.error_handler import ErrorHandlerMiddleware, ErrorResponse
from .api.middleware.request_id import RequestIDMiddleware
from .api.routes.health import HealthRouter
from .api.routes.info import InfoRouter
from .api.routes.models import ModelsRouter
from .api.routes.recommend import RecommendRouter


class LLMCompassApp(FastAPI):
    """LLM Compass FastAPI application."""

    def __init__(
        self,
        lifespan: Optional[Callable] = None,
    ) -> None:
        """Initialize LLM Compass application.

        Args:
            lifespan: Application lifespan manager
        """
        self._configured = False
        super().__init__(
            title="LLM Compass",
            description="""
            # LLM Model Recommender

            Recommends OpenRouter catalog models for a free-text use case by
            extracting constraints, filtering the catalog and ranking the
            remaining candidates with a generative model.
            """,
            version="0.1.0",  # Will be updated in configure()
            docs_url="/docs",
            redoc_url="/redoc",
            lifespan=lifespan,
        )

        # Dependencies will be set later
        self.state.logger = None
        self.state.settings = None
        self.state.redis_client = None
        self.state.catalog_cache = None
        self.state.catalog_provider = None
        self.state.generative_provider = None
        self.state.recommendation_service = None

    def configure(self) -> None:
        """Configure middleware and routes after dependencies are set."""
        if self._configured:
            raise RuntimeError("Application is already configured")

        if not all(
            [
                self.state.logger,
                self.state.settings,
                self.state.catalog_cache,
                self.state.recommendation_service,
            ]
        ):
            raise RuntimeError("Dependencies must be set before configuring the app.")

        self.version = self.state.settings.VERSION

        app_logger = self.state.logger.get_logger(__name__)
        logger = self.state.logger
        settings = self.state.settings
        prefix = settings.API_PREFIX

        # Middleware added last runs first
        app_logger.info("Adding ErrorHandlerMiddleware")
        self.add_middleware(ErrorHandlerMiddleware, logger=logger, settings=settings)

        app_logger.info("Adding RequestIDMiddleware")
        self.add_middleware(RequestIDMiddleware, logger=logger, settings=settings)

        # Outermost so error responses also carry CORS headers
        app_logger.info(
            "Configuring CORS middleware",
            extra={"allowed_origins": settings.BACKEND_CORS_ORIGINS},
        )
        self.add_middleware(
            CORSMiddleware,
            allow_origins=settings.BACKEND_CORS_ORIGINS,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

        self.include_router(InfoRouter(logger=logger, settings=settings).router)
        self.include_router(HealthRouter(logger=logger, prefix=prefix).router)

        app_logger.info("Registering RecommendRouter")
        recommend_router = RecommendRouter(
            logger=logger,
            recommendation_service=self.state.recommendation_service,
            prefix=prefix,
        )
        self.include_router(recommend_router.router)

        app_logger.info("Registering ModelsRouter")
        models_router = ModelsRouter(
            logger=logger,
            catalog_cache=self.state.catalog_cache,
            prefix=prefix,
        )
        self.include_router(models_router.router)

        app_logger.info("Registering global exception handlers")
        self.add_exception_handler(HTTPException, self._http_exception_handler)
        self.add_exception_handler(
            RequestValidationError, self._validation_exception_handler
        )

        app_logger.info(
            "LLM Compass application configuration completed successfully",
            extra={
                "middleware_count": len(self.user_middleware),
                "router_count": len(self.router.routes),
                "api_prefix": prefix,
            },
        )

        self._configured = True

    async def _http_exception_handler(
        self, request: Request, exc: HTTPException
    ) -> JSONResponse:  # type: ignore
        """Handle HTTP exceptions.

        Args:
            request: FastAPI request
            exc: HTTP exception

        Returns:
            JSON response with error details
        """
        self.state.logger.get_logger(__name__).warning(
            "HTTP error occurred",
            extra={
                "request_id": getattr(request.state, "request_id", None),
                "path": request.url.path,
                "method": request.method,
                "status_code": exc.status_code,
                "detail": exc.detail,
            },
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse.create(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    async def _validation_exception_handler(
        self, request: Request, exc: RequestValidationError
    ) -> JSONResponse:  # type: ignore
        """Render request validation failures as 400 responses.

        Args:
            request: FastAPI request
            exc: Validation exception

        Returns:
            JSON response with the first validation problem as details
        """
        errors = exc.errors()
        self.state.logger.get_logger(__name__).warning(
            "Validation error",
            extra={
                "request_id": getattr(request.state, "request_id", None),
                "path": request.url.path,
                "method": request.method,
                "errors": [
                    {"loc": error.get("loc"), "msg": error.get("msg")}
                    for error in errors
                ],
            },
        )
        details = None
        if errors:
            first = errors[0]
            location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
            details = f"{location}: {first.get('msg')}" if location else first.get("msg")
        return JSONResponse(
            status_code=400,
            content=ErrorResponse.create("Invalid request", details),
        )
