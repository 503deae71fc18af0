"""Factory Boy definition for :class:`mediahub.models.subscription.Subscription`."""

from __future__ import annotations

import factory

from mediahub.models.subscription import Subscription
from tests.factories import BaseFactory
from tests.factories.user import UserFactory


class SubscriptionFactory(BaseFactory):
    """A ``subscriber`` → ``channel`` edge."""

    class Meta:
        model = Subscription

    subscriber = factory.SubFactory(UserFactory)
    channel = factory.SubFactory(UserFactory)
