from fastapi import HTTPException, Request, status

from .notifications.gateway import DeliveryGateway


async def get_delivery_gateway(request: Request) -> DeliveryGateway:
    """Return the delivery gateway created at application startup."""
    gateway = getattr(request.app.state, "delivery_gateway", None)
    if gateway is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Delivery gateway is not initialized"
        )
    return gateway
