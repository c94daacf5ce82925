import asyncio
import logging
from typing import List, Optional, Protocol

import firebase_admin
from firebase_admin import messaging
from firebase_admin.exceptions import FirebaseError

from .schemas import DeliveryOutcome, MulticastOutcome, PushMessage

logger = logging.getLogger(__name__)

# Error code reported for tokens whose app instance is gone for good
REGISTRATION_TOKEN_NOT_REGISTERED = "messaging/registration-token-not-registered"

# FCM allows up to 500 tokens per multicast request
FCM_MAX_MULTICAST_TOKENS = 500


class DeliveryGatewayError(Exception):
    """The push backend rejected or failed the whole multicast call."""


class DeliveryGateway(Protocol):
    async def send_multicast(self, message: PushMessage) -> MulticastOutcome:
        ...


class FirebaseDeliveryGateway:
    """Delivery gateway backed by Firebase Cloud Messaging."""

    def __init__(self,
                 app: Optional[firebase_admin.App] = None,
                 batch_size: int = FCM_MAX_MULTICAST_TOKENS,
                 dry_run: bool = False):
        """
        Initialize the gateway.

        Args:
            app: Firebase app to send through, the default app when None
            batch_size: Maximum tokens per FCM request (1-500)
            dry_run: Validate messages with FCM without delivering them
        """
        if not 1 <= batch_size <= FCM_MAX_MULTICAST_TOKENS:
            raise ValueError(f"batch_size must be between 1 and {FCM_MAX_MULTICAST_TOKENS}")
        self.app = app
        self.batch_size = batch_size
        self.dry_run = dry_run
        logger.info("Firebase delivery gateway initialized")

    async def send_multicast(self, message: PushMessage) -> MulticastOutcome:
        # The Admin SDK is blocking, keep it off the event loop
        return await asyncio.to_thread(self._send_multicast, message)

    def _send_multicast(self, message: PushMessage) -> MulticastOutcome:
        success_count = 0
        failure_count = 0
        responses: List[DeliveryOutcome] = []

        for i in range(0, len(message.tokens), self.batch_size):
            batch = message.tokens[i:i + self.batch_size]
            try:
                batch_response = messaging.send_each_for_multicast(
                    build_multicast_message(message, batch),
                    dry_run=self.dry_run,
                    app=self.app,
                )
            except (FirebaseError, ValueError) as e:
                raise DeliveryGatewayError(f"Multicast send failed: {str(e)}") from e

            success_count += batch_response.success_count
            failure_count += batch_response.failure_count
            responses.extend(to_delivery_outcome(resp) for resp in batch_response.responses)

        return MulticastOutcome(
            success_count=success_count,
            failure_count=failure_count,
            responses=responses,
        )


def build_multicast_message(message: PushMessage, tokens: List[str]) -> messaging.MulticastMessage:
    """Convert a push message into an FCM multicast message with an APNs alert."""
    return messaging.MulticastMessage(
        data=dict(message.data),
        apns=messaging.APNSConfig(
            payload=messaging.APNSPayload(
                aps=messaging.Aps(
                    alert=messaging.ApsAlert(title=message.title, body=message.body),
                    category=message.category,
                )
            )
        ),
        tokens=list(tokens),
    )


def to_delivery_outcome(response: messaging.SendResponse) -> DeliveryOutcome:
    if response.success:
        return DeliveryOutcome(success=True)

    error = response.exception
    if isinstance(error, messaging.UnregisteredError):
        code = REGISTRATION_TOKEN_NOT_REGISTERED
    else:
        code = getattr(error, 'code', None)
    return DeliveryOutcome(
        success=False,
        error_code=code,
        error_message=str(error) if error is not None else None,
    )
