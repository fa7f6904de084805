from gopay_client import GoPayClient, GoPayError, PaymentFlowController, SessionGuard, Settings
from gopay_client.engine.events import PaymentFailedEvent, PaymentSucceededEvent
from gopay_client.services import auth

email = "you@example.com"  # Replace with a registered account
password = "change-me"


async def main():
    settings = Settings.from_env()
    async with GoPayClient.from_settings(settings) as client:
        await auth.login(client, {"email": email, "password": password})

        guard = SessionGuard(client)
        state = await guard.bootstrap()
        if not state.authenticated:
            print("Redirect to", state.redirect_to, "-", state.error)
            return

        controller = PaymentFlowController(client, state.account)

        @controller.event_bus.on(PaymentSucceededEvent)
        async def on_success(event):
            print(f"Payment successful! Order ID: {event.record.order_id}")

        @controller.event_bus.on(PaymentFailedEvent)
        async def on_failure(event):
            print("Payment failed:", event.message)

        if controller.can_pay:
            try:
                await controller.pay()
            except GoPayError:
                return
        print("Balance:", controller.account.balance)


if __name__ == "__main__":
    import asyncio
    asyncio.run(main())
