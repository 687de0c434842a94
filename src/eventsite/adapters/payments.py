"""Payments gateways that do not talk to a real provider.

`LocalPaymentsGateway` hands out made-up customer and subscription ids so the
subscription flow can be exercised locally and in tests.
"""

import logging

from eventsite.domain.value_objects import SubscriptionIds
from eventsite.interfaces.id_generator import IdGenerator
from eventsite.interfaces.payments import PaymentsError, PaymentsGateway

logger = logging.getLogger(__name__)

# Tokens the local gateway refuses, mimicking a declined card.
DECLINED_TOKENS = frozenset({"tok_declined", "tok_chargeDeclined"})


class LocalPaymentsGateway(PaymentsGateway):
    """Fake provider that records every subscription it creates."""

    def __init__(self, id_generator: IdGenerator) -> None:
        self.id_generator = id_generator
        self.subscriptions: dict[str, SubscriptionIds] = {}

    def create_subscription(self, user_id: str, payment_token: str) -> SubscriptionIds:
        if not payment_token.strip():
            raise PaymentsError("A payment token is required.")
        if payment_token in DECLINED_TOKENS:
            raise PaymentsError(f"Payment token {payment_token!r} was declined.")
        suffix = self.id_generator.new_id()
        ids = SubscriptionIds(customer_id=f"cus_{suffix}", subscription_id=f"sub_{suffix}")
        self.subscriptions[user_id] = ids
        logger.debug("Created local subscription %s for %s", ids.subscription_id, user_id)
        return ids


class UnconfiguredPaymentsGateway(PaymentsGateway):
    """Stand-in used where no real provider is wired; refuses every request."""

    def create_subscription(self, user_id: str, payment_token: str) -> SubscriptionIds:
        raise PaymentsError("No payments provider is configured for this environment.")
