import logging
from typing import List, Optional

from .gateway import REGISTRATION_TOKEN_NOT_REGISTERED, DeliveryGateway
from .payloads import NotificationRequest, build_message
from .schemas import DispatchResult, MulticastOutcome, NotificationKind

logger = logging.getLogger(__name__)


def collect_unregistered_tokens(tokens: List[str], outcome: MulticastOutcome) -> List[str]:
    """
    Pick the tokens the caller should forget about.

    Outcomes are matched to tokens by position. Only tokens reported as no
    longer registered are returned; any other failure is logged.
    """
    failed_tokens = []
    if outcome.failure_count > 0:
        for idx, resp in enumerate(outcome.responses):
            if resp.success:
                continue
            if resp.error_code == REGISTRATION_TOKEN_NOT_REGISTERED:
                failed_tokens.append(tokens[idx])
            else:
                logger.error(resp.error_message)
    return failed_tokens


async def dispatch(kind: NotificationKind,
                   request: NotificationRequest,
                   gateway: DeliveryGateway) -> Optional[DispatchResult]:
    """
    Send a task notification to every device token in the request.

    Args:
        kind: Notification kind, selects the message layout
        request: Parsed request body
        gateway: Delivery gateway used for the multicast send

    Returns:
        The delivery summary, or None when the request carries no tokens
    """
    logger.info(f"Received notification payload ({kind.value})")

    tokens = request.tokens
    if not tokens:
        logger.info("No device tokens in payload, nothing to send")
        return None

    logger.info(f"Sending notifications to {len(tokens)} devices")

    message = build_message(kind, request)
    outcome = await gateway.send_multicast(message)

    failed_tokens = collect_unregistered_tokens(tokens, outcome)

    logger.info(f"Returning response - failedTokenCount of {len(failed_tokens)}")

    return DispatchResult(
        successCount=outcome.success_count,
        failureCount=outcome.failure_count,
        failedTokens=failed_tokens,
    )
