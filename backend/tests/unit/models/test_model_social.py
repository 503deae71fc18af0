# tests/unit/models/test_model_social.py
from __future__ import annotations

import pytest
from mongoengine.errors import NotUniqueError

from mediahub.models import Subscription, User, Video
from tests.factories.subscription import SubscriptionFactory
from tests.factories.user import UserFactory
from tests.factories.video import VideoFactory


def test_subscription_links_subscriber_to_channel():
    channel = UserFactory(username="channel")
    edge = SubscriptionFactory(channel=channel)

    stored = Subscription.objects.get(id=edge.id)
    assert stored.channel.id == channel.id
    assert stored.subscriber.id != channel.id
    assert Subscription.objects(channel=channel).count() == 1
    assert Subscription._get_collection_name() == "subscriptions"


def test_subscription_edge_is_unique_per_pair():
    channel, follower = UserFactory(), UserFactory()
    SubscriptionFactory(subscriber=follower, channel=channel)
    SubscriptionFactory(subscriber=channel, channel=follower)

    with pytest.raises(NotUniqueError):
        SubscriptionFactory(subscriber=follower, channel=channel)
    assert Subscription.objects.count() == 2


def test_video_belongs_to_owner():
    owner = UserFactory()
    video = VideoFactory(owner=owner, views=3)

    stored = Video.objects.get(id=video.id)
    assert stored.owner.id == owner.id
    assert stored.views == 3
    assert Video._get_collection_name() == "videos"


def test_watch_history_keeps_insertion_order():
    first, second = VideoFactory(), VideoFactory()
    viewer = UserFactory(watch_history=[second.id, first.id, second.id])

    stored = User.objects.get(id=viewer.id)
    assert stored.watch_history == [second.id, first.id, second.id]
