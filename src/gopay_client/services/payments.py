"""
Payment endpoint operations.
"""

import logging
from typing import Any, Mapping, Union

from ..clients.http_client import GoPayClient
from ..schemas.https import PaymentRecord, PaymentRequest
from .auth import parse_response

logger = logging.getLogger(__name__)


async def initiate_payment(
    client: GoPayClient,
    request: Union[PaymentRequest, Mapping[str, Any]],
) -> PaymentRecord:
    """
    Create a payment order for the signed-in user.

    Args:
        client: Transport client holding the bearer credential
        request: Amount (minor units) and source/destination accounts

    Returns:
        The server's payment record, including the gateway order id
    """
    body = PaymentRequest.model_validate(request)
    data = await client.fetch_api("/pay", method="POST", body=body, authorized=True)
    record = parse_response(PaymentRecord, data)
    logger.info("Payment order %s created (status=%s)", record.order_id, record.status)
    return record
