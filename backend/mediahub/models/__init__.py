from mediahub.models.subscription import Subscription
from mediahub.models.user import PRIVATE_FIELDS, User
from mediahub.models.video import Video

__all__ = [
    "PRIVATE_FIELDS",
    "Subscription",
    "User",
    "Video",
]
