"""Interface for the payments provider."""

from __future__ import annotations

import abc

from eventsite.domain.value_objects import SubscriptionIds

# pylint: disable=too-few-public-methods


class PaymentsError(Exception):
    """The payments provider declined or failed to create a subscription."""


class PaymentsGateway(abc.ABC):
    """Creates paid subscriptions with an external provider."""

    @abc.abstractmethod
    def create_subscription(self, user_id: str, payment_token: str) -> SubscriptionIds:
        """Subscribe `user_id` using a payment token obtained by the client.

        Raises:
            PaymentsError: If the provider rejects the request.
        """
