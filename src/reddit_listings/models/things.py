"""
Typed Reddit entities decoded from listing envelopes.

Every entity is an immutable pydantic model. Two entities decoded from the
same wire data compare equal.

Absent numeric fields decode to zero, so a zero count in these models can
mean either "Reddit said zero" or "Reddit did not send the field".
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Any, ClassVar, Dict, Tuple

from pydantic import BaseModel, ConfigDict, Field


# Sentinel for "unknown / not applicable". Real timestamps are always after 1970.
ZERO_TIMESTAMP = datetime(1, 1, 1, tzinfo=timezone.utc)


class Kind(str, Enum):
    """Kind codes found in the ``kind`` member of wire envelopes."""

    COMMENT = "t1"
    ACCOUNT = "t2"
    POST = "t3"
    MESSAGE = "t4"
    SUBREDDIT = "t5"
    AWARD = "t6"
    MORE = "more"
    LISTING = "Listing"


class Vote(Enum):
    """
    The current user's vote on a post or comment.

    ABSENT covers both "no vote" and "vote withheld" (logged-out requests).
    """

    ABSENT = "absent"
    UPVOTED = "upvoted"
    DOWNVOTED = "downvoted"


class Entity(BaseModel):
    """Base class for decoded entities."""

    model_config = ConfigDict(frozen=True)

    kind: ClassVar[Kind]

    id: str = Field(..., description="Local id, unique within the kind")
    fullname: str = Field(..., description="Kind-prefixed id, e.g. t3_i2gvg4")


class Post(Entity):
    """
    A link or self post (kind ``t3``).

    ``url`` is the external link for link posts and the post's own page for
    self posts.
    """

    kind: ClassVar[Kind] = Kind.POST

    created: datetime = Field(ZERO_TIMESTAMP, description="Creation time (UTC)")
    edited: datetime = Field(
        ZERO_TIMESTAMP,
        description="Last edit time (UTC), ZERO_TIMESTAMP if never edited",
    )

    permalink: str = ""
    url: str = ""

    title: str = ""
    body: str = Field("", description="Self text, empty for link posts")

    likes: Vote = Vote.ABSENT
    score: int = 0
    upvote_ratio: float = Field(0.0, ge=0.0, le=1.0)
    num_comments: int = Field(0, ge=0)

    subreddit_name: str = ""
    subreddit_name_prefixed: str = ""
    subreddit_id: str = ""
    subreddit_subscribers: int = Field(0, ge=0)

    author: str = ""
    author_id: str = ""

    spoiler: bool = False
    locked: bool = False
    nsfw: bool = False
    is_self_post: bool = False
    saved: bool = False
    stickied: bool = False

    @property
    def was_edited(self) -> bool:
        return self.edited != ZERO_TIMESTAMP

    @property
    def is_link_post(self) -> bool:
        """True when the post points at an external URL instead of carrying text."""
        return not self.is_self_post


class Comment(Entity):
    """
    A comment (kind ``t1``).

    Only the parent reference is carried; replies are not linked.
    """

    kind: ClassVar[Kind] = Kind.COMMENT

    created: datetime = ZERO_TIMESTAMP
    edited: datetime = ZERO_TIMESTAMP

    parent_id: str = Field("", description="Fullname of the parent post or comment")
    permalink: str = ""

    body: str = ""
    author: str = ""
    author_id: str = ""
    author_flair_text: str = ""

    subreddit_name: str = ""
    subreddit_name_prefixed: str = ""
    subreddit_id: str = ""

    likes: Vote = Vote.ABSENT
    score: int = 0
    controversiality: int = Field(0, ge=0)

    post_id: str = Field("", description="Fullname of the post this comment belongs to")
    post_title: str = ""
    post_permalink: str = ""
    post_author: str = ""
    post_num_comments: int = Field(0, ge=0)

    is_submitter: bool = False
    score_hidden: bool = False
    saved: bool = False
    stickied: bool = False
    locked: bool = False
    can_gild: bool = False
    nsfw: bool = False

    @property
    def was_edited(self) -> bool:
        return self.edited != ZERO_TIMESTAMP


class Subreddit(Entity):
    """A subreddit (kind ``t5``)."""

    kind: ClassVar[Kind] = Kind.SUBREDDIT

    # ``created`` is Reddit's legacy server-local time; ``created_utc`` is UTC.
    created: datetime = ZERO_TIMESTAMP
    created_utc: datetime = ZERO_TIMESTAMP

    url: str = ""
    display_name: str = ""
    display_name_prefixed: str = ""
    title: str = ""
    description: str = ""
    description_html: str = ""
    public_description: str = ""
    subreddit_type: str = ""
    submission_type: str = ""
    lang: str = ""

    subscribers: int = Field(0, ge=0)
    active_user_count: int = Field(0, ge=0)

    nsfw: bool = False
    quarantine: bool = False
    user_is_subscriber: bool = False
    user_is_moderator: bool = False
    user_has_favorited: bool = False

    allow_discovery: bool = False
    allow_galleries: bool = False
    allow_images: bool = False
    allow_polls: bool = False
    allow_videogifs: bool = False
    allow_videos: bool = False
    can_assign_link_flair: bool = False
    can_assign_user_flair: bool = False
    free_form_reports: bool = False
    is_chat_post_feature_enabled: bool = False
    is_crosspostable_subreddit: bool = False
    link_flair_enabled: bool = False
    restrict_posting: bool = False
    show_media: bool = False
    show_media_preview: bool = False
    spoilers_enabled: bool = False
    user_sr_theme_enabled: bool = False

    link_flair_position: str = ""
    notification_level: str = ""
    user_flair_position: str = ""
    user_flair_type: str = ""
    user_flair_richtext: Tuple[Dict[str, Any], ...] = Field(
        (), description="Richtext segments of the default user flair"
    )
    whitelist_status: str = ""
    wls: int = Field(0, ge=0)


class Account(Entity):
    """A user account (kind ``t2``)."""

    kind: ClassVar[Kind] = Kind.ACCOUNT

    name: str = ""
    created: datetime = ZERO_TIMESTAMP

    post_karma: int = 0
    comment_karma: int = 0

    is_friend: bool = False
    is_employee: bool = False
    has_verified_email: bool = False
    is_suspended: bool = False
    nsfw: bool = False


class MoreComments(Entity):
    """Placeholder for comments that were not included in a listing (kind ``more``)."""

    kind: ClassVar[Kind] = Kind.MORE

    parent_id: str = ""
    count: int = Field(0, ge=0)
    depth: int = Field(0, ge=0)
    children: Tuple[str, ...] = ()
