"""
Payment flow controller.

Wraps the /pay operation with the dashboard's business rules: a minimum
balance precondition, a credential check before any network call, and an
optimistic local update of the cached Account after the server accepts the
payment.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from ..clients.http_client import GoPayClient
from ..schemas.accounts import PAYMENT_AMOUNT, PAYMENT_DESCRIPTION, Account, apply_payment_result
from ..schemas.https import PaymentRecord, PaymentRequest
from ..services.payments import initiate_payment
from .events import EventBus, PaymentFailedEvent, PaymentSucceededEvent
from .exceptions import GoPayError, HTTPError, InsufficientFundsError, UnauthenticatedError

logger = logging.getLogger(__name__)

FROM_ACCOUNT = "wallet"
TO_ACCOUNT = "merchant"


class PaymentFlowController:
    """
    Drives the single fixed-amount payment for one signed-in session.

    The controller owns the cached Account between full profile refreshes.
    ``processing`` is an advisory flag for views that want to disable the pay
    button; ``pay`` itself does not refuse concurrent calls.

    Usage:
        ```python
        controller = PaymentFlowController(client, account, event_bus=bus)
        if controller.can_pay:
            record = await controller.pay()
        ```
    """

    def __init__(
        self,
        client: GoPayClient,
        account: Account,
        event_bus: Optional[EventBus] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        """
        Args:
            client: Transport client; its session store supplies the credential
            account: Account as last loaded from the server
            event_bus: Where success/failure events are published (default: private bus)
            clock: Source of the local transaction timestamp (default: UTC now)
        """
        self.client = client
        self.account = account
        self.event_bus = event_bus or EventBus()
        self._clock = clock
        self.processing = False

    @property
    def can_pay(self) -> bool:
        return not self.processing and self.account.balance >= PAYMENT_AMOUNT

    def refresh(self, account: Account) -> None:
        """Replace the cached account after a full profile reload."""
        self.account = account

    async def pay(self) -> PaymentRecord:
        """
        Make the fixed payment and apply it to the cached account.

        Returns:
            The server's payment record

        Raises:
            InsufficientFundsError: balance below the payment amount (no request sent)
            UnauthenticatedError: no stored credential (no request sent)
            RequestError: any normalized transport/HTTP failure
        """
        try:
            self._check_preconditions()
            self.processing = True
            try:
                record = await initiate_payment(
                    self.client,
                    PaymentRequest(
                        amount=PAYMENT_AMOUNT,
                        from_account=FROM_ACCOUNT,
                        to_account=TO_ACCOUNT,
                    ),
                )
            finally:
                self.processing = False
        except GoPayError as exc:
            if isinstance(exc, HTTPError) and exc.status == 401:
                self.client.session_store.clear()
            logger.warning("Payment failed (%s): %s", exc.kind.value, exc.user_message())
            await self.event_bus.publish(
                PaymentFailedEvent(
                    message=exc.user_message(),
                    kind=exc.kind,
                    status=getattr(exc, "status", None),
                )
            )
            raise

        now = self._clock() if self._clock else None
        self.account = apply_payment_result(
            self.account, record, PAYMENT_AMOUNT, PAYMENT_DESCRIPTION, now=now
        )
        logger.info("Payment %s applied; balance now %s", record.order_id, self.account.balance)
        await self.event_bus.publish(PaymentSucceededEvent(account=self.account, record=record))
        return record

    def _check_preconditions(self) -> None:
        if self.account.balance < PAYMENT_AMOUNT:
            raise InsufficientFundsError(required=PAYMENT_AMOUNT, available=self.account.balance)
        if not self.client.session_store.get():
            raise UnauthenticatedError("User not authenticated. Token missing.")
