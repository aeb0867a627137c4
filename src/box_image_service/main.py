"""
FastAPI application entry point for the Box Image Classification Service.

Serves Classify over HTTP (this app) and, when GRPC_ENABLED, over gRPC from
the same process and event loop.
"""

import structlog
from fastapi import FastAPI
from prometheus_fastapi_instrumentator import Instrumentator

from box_image_service.api.dependencies import create_classification_service
from box_image_service.api.error_handlers import EXCEPTION_HANDLERS
from box_image_service.api.middleware import RequestTracingMiddleware
from box_image_service.api.routes import router
from box_image_service.config import settings
from box_image_service.logging_config import configure_logging
from box_image_service.rpc.grpc_server import start_grpc_server, stop_grpc_server

# Configure structured logging before any other imports
configure_logging(settings.LOG_LEVEL, settings.ENVIRONMENT)
logger = structlog.get_logger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="Classifies box images into one of four labels with a served model",
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Request tracing middleware (must be first for request_id in all logs)
app.add_middleware(RequestTracingMiddleware)

# Register exception handlers
for exc_class, handler in EXCEPTION_HANDLERS.items():
    app.add_exception_handler(exc_class, handler)

app.include_router(router, tags=["classify"])


# Startup event
@app.on_event("startup")
async def startup():
    """Load model metadata, build the service and start the gRPC server."""
    logger.info(
        "Application startup",
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        backend_url=settings.BACKEND_URL,
        model=settings.MODEL_NAME,
        signature_key=settings.SIGNATURE_KEY,
    )

    # Metadata fetch failure is fatal: nothing can be served without a model
    try:
        service = await create_classification_service(settings)
    except Exception as e:
        logger.error("Failed to load model metadata", model=settings.MODEL_NAME, exc_info=e)
        raise
    app.state.classification_service = service

    if settings.GRPC_ENABLED:
        # Shutdown does not run when startup fails, so release the backend here
        try:
            server, port = await start_grpc_server(
                service,
                port=settings.GRPC_PORT,
                max_concurrent_rpcs=settings.GRPC_MAX_CONCURRENT_RPCS,
            )
        except Exception as e:
            logger.error("Failed to start gRPC server", grpc_port=settings.GRPC_PORT, exc_info=e)
            app.state.classification_service = None
            await service.aclose()
            raise
        app.state.grpc_server = server
        logger.info("Running...", grpc_port=port, http_port=settings.HTTP_PORT)
    else:
        logger.info("Running...", http_port=settings.HTTP_PORT)


# Shutdown event
@app.on_event("shutdown")
async def shutdown():
    """Stop the gRPC server, then release the backend."""
    logger.info("Application shutdown")

    server = getattr(app.state, "grpc_server", None)
    if server is not None:
        await stop_grpc_server(server, grace=settings.GRPC_SHUTDOWN_GRACE)
        app.state.grpc_server = None

    service = getattr(app.state, "classification_service", None)
    if service is not None:
        await service.aclose()
        app.state.classification_service = None

    logger.info("Application shutdown complete")


# Prometheus metrics instrumentation
if settings.PROMETHEUS_ENABLED:
    Instrumentator().instrument(app).expose(app)


@app.get("/")
async def root():
    """Root endpoint with API documentation links."""
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "classify": "/classify",
        "health": "/health",
        "signature": "/signature",
        "grpc_port": settings.GRPC_PORT if settings.GRPC_ENABLED else None,
        "metrics": "/metrics" if settings.PROMETHEUS_ENABLED else None,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "box_image_service.main:app",
        host=settings.HTTP_HOST,
        port=settings.HTTP_PORT,
        reload=settings.DEBUG,
    )
