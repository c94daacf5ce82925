import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, Response

from .config import Settings, get_prefix, settings as default_settings
from .firebase import get_firebase_app
from .logging_config import setup_logging
from .notifications.gateway import DeliveryGateway, DeliveryGatewayError, FirebaseDeliveryGateway
from .notifications.router import router as notifications_router

logger = logging.getLogger(__name__)


def create_app(gateway: Optional[DeliveryGateway] = None,
               settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the HTTP application.

    Args:
        gateway: Delivery gateway to use; a Firebase gateway is created at
            startup when None
        settings: Settings to use instead of the environment-loaded ones
    """
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings)
        if getattr(app.state, "delivery_gateway", None) is None:
            firebase_app = get_firebase_app(settings)
            app.state.delivery_gateway = FirebaseDeliveryGateway(
                app=firebase_app,
                batch_size=settings.fcm_batch_size,
                dry_run=settings.fcm_dry_run,
            )
        logger.info(f"{settings.service_name} started in {settings.environment} environment")
        yield
        logger.info(f"{settings.service_name} shutting down")

    prefix = get_prefix(settings.path_prefix)
    logger.info(f"Start HTTP server with prefix: {prefix or '/'}")

    app = FastAPI(title="Task Notifications API", version="1.0.0", lifespan=lifespan)
    app.state.delivery_gateway = gateway

    @app.exception_handler(DeliveryGatewayError)
    async def delivery_gateway_error_handler(request: Request, exc: DeliveryGatewayError):
        logger.error(f"{request.method} {request.url.path} failed: {str(exc)}", exc_info=exc)
        return Response(status_code=500)

    @app.get("/health", tags=["Health"])
    async def health():
        return {"status": "ok"}

    app.include_router(notifications_router, prefix=prefix)
    return app


def run():
    """Console entry point: serve the API."""
    uvicorn.run(create_app(), host=default_settings.host, port=default_settings.port, log_config=None)


if __name__ == "__main__":
    run()
