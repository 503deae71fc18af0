"""
Aggregation pipelines for the two social-graph read queries.

Both builders are pure functions returning the stage list; running them is
the repository's job. Stage order is fixed:
match → lookup(s) → derived fields → projection.
"""

from __future__ import annotations

from typing import Any

from bson import ObjectId

from mediahub.models.subscription import Subscription
from mediahub.models.user import User
from mediahub.models.video import Video

Stage = dict[str, Any]

# Collection names are read from the documents so renames stay in one place.
USERS = User._get_collection_name()
VIDEOS = Video._get_collection_name()
SUBSCRIPTIONS = Subscription._get_collection_name()

CHANNEL_FIELDS = (
    "username",
    "email",
    "subscribers_count",
    "subscribed_to_count",
    "is_subscribed",
    "avatar",
    "picture",
)
OWNER_FIELDS = ("username", "avatar")


def channel_profile_pipeline(username: str, actor_id: ObjectId | None) -> list[Stage]:
    """
    Build the channel profile query for ``username``.

    Subscription edges are joined twice: with the matched user as
    ``channel`` (its subscribers) and as ``subscriber`` (the channels it
    follows). ``is_subscribed`` tests whether ``actor_id`` is among the
    subscribers; it is ``False`` for anonymous callers.

    Parameters
    ----------
    username : str
        Channel username, matched lowercase.
    actor_id : ObjectId | None
        Requesting user.

    Returns
    -------
    list[dict]
        Pipeline yielding at most one document with ``_id`` and
        :data:`CHANNEL_FIELDS`. Password and refresh token are left out by
        omission.
    """
    if actor_id is None:
        is_subscribed: Any = False
    else:
        is_subscribed = {
            "$cond": {
                "if": {"$in": [actor_id, "$subscribers.subscriber"]},
                "then": True,
                "else": False,
            }
        }

    return [
        {"$match": {"username": username.strip().lower()}},
        {
            "$lookup": {
                "from": SUBSCRIPTIONS,
                "localField": "_id",
                "foreignField": "channel",
                "as": "subscribers",
            }
        },
        {
            "$lookup": {
                "from": SUBSCRIPTIONS,
                "localField": "_id",
                "foreignField": "subscriber",
                "as": "subscribed_to",
            }
        },
        {
            "$addFields": {
                "subscribers_count": {"$size": "$subscribers"},
                "subscribed_to_count": {"$size": "$subscribed_to"},
                "is_subscribed": is_subscribed,
            }
        },
        {"$project": {name: 1 for name in CHANNEL_FIELDS}},
    ]


def watch_history_pipeline(user_id: ObjectId) -> list[Stage]:
    """
    Build the watch history query for one user.

    Videos are joined from ``watch_history``; each video's owner is joined
    and reduced to :data:`OWNER_FIELDS`, then collapsed from a one-element
    array to an object (``$first``), which leaves ``owner`` missing when the
    owner is gone.

    ``$lookup`` does not keep the order of ``localField``, so the final stage
    maps the joined videos back onto the id list. Ids without a video are
    dropped; duplicates are kept in place.

    Returns
    -------
    list[dict]
        Pipeline yielding zero or one document ``{"watch_history": [...]}``.
    """
    ordered = {
        "$map": {
            "input": {"$ifNull": ["$watch_history", []]},
            "as": "video_id",
            "in": {
                "$arrayElemAt": [
                    {
                        "$filter": {
                            "input": "$history_videos",
                            "as": "video",
                            "cond": {"$eq": ["$$video._id", "$$video_id"]},
                        }
                    },
                    0,
                ]
            },
        }
    }

    return [
        {"$match": {"_id": user_id}},
        {
            "$lookup": {
                "from": VIDEOS,
                "localField": "watch_history",
                "foreignField": "_id",
                "as": "history_videos",
                "pipeline": [
                    {
                        "$lookup": {
                            "from": USERS,
                            "localField": "owner",
                            "foreignField": "_id",
                            "as": "owner",
                            "pipeline": [{"$project": {name: 1 for name in OWNER_FIELDS}}],
                        }
                    },
                    {"$addFields": {"owner": {"$first": "$owner"}}},
                ],
            }
        },
        {
            "$project": {
                "_id": 0,
                "watch_history": {
                    "$filter": {
                        "input": ordered,
                        "as": "entry",
                        "cond": {"$ne": ["$$entry", None]},
                    }
                },
            }
        },
    ]
