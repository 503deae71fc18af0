"""Factory Boy definition for :class:`mediahub.models.video.Video`."""

from __future__ import annotations

import factory

from mediahub.models.video import Video
from tests.factories import BaseFactory
from tests.factories.user import UserFactory


class VideoFactory(BaseFactory):
    class Meta:
        model = Video

    video_file = factory.Sequence(lambda n: f"https://media.test/video-{n}.mp4")
    thumbnail = factory.Sequence(lambda n: f"https://media.test/thumb-{n}.jpg")
    title = factory.Faker("sentence", nb_words=4)
    description = factory.Faker("paragraph")
    duration = factory.Faker("pyfloat", min_value=1, max_value=600)
    views = 0
    is_published = True
    owner = factory.SubFactory(UserFactory)
