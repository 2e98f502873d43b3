"""
Per-kind decoders from envelope data to typed entities.

Each ``decode_*`` function takes the ``data`` object of one envelope and
returns a fully populated entity, or raises MalformedField naming the first
field that could not be normalized.
"""

from typing import Any, Callable, Dict, Type, TypeVar

from pydantic import ValidationError as PydanticValidationError

from reddit_listings.exceptions import MalformedField
from reddit_listings.models.things import (
    Account,
    Comment,
    Entity,
    Kind,
    MoreComments,
    Post,
    Subreddit,
)
from reddit_listings.reddit.fullname import make_fullname
from reddit_listings.reddit.normalizer import FieldNormalizer

E = TypeVar("E", bound=Entity)


class FieldReader:
    """
    Reads wire fields of one envelope through the field normalizers.

    Normalizer failures are re-raised as MalformedField carrying the wire
    field name and the envelope kind.
    """

    def __init__(self, kind: Kind, data: Dict[str, Any]) -> None:
        self.kind = kind
        self.data = data

    def read(self, name: str, normalize: Callable[[Any], Any]) -> Any:
        try:
            return normalize(self.data.get(name))
        except (TypeError, ValueError) as e:
            raise MalformedField(name, self.kind.value, str(e)) from e

    def string(self, name: str) -> str:
        return self.read(name, FieldNormalizer.normalize_string)

    def boolean(self, name: str) -> bool:
        return self.read(name, FieldNormalizer.normalize_boolean)

    def count(self, name: str) -> int:
        return self.read(name, FieldNormalizer.normalize_count)

    def integer(self, name: str) -> int:
        return self.read(name, FieldNormalizer.normalize_integer)

    def ratio(self, name: str) -> float:
        return self.read(name, FieldNormalizer.normalize_ratio)

    def timestamp(self, name: str):
        return self.read(name, FieldNormalizer.normalize_timestamp)

    def edited(self, name: str = "edited"):
        return self.read(name, FieldNormalizer.normalize_edited)

    def vote(self, name: str = "likes"):
        return self.read(name, FieldNormalizer.normalize_vote)

    def string_list(self, name: str):
        return self.read(name, FieldNormalizer.normalize_string_list)

    def object_list(self, name: str):
        return self.read(name, FieldNormalizer.normalize_object_list)

    def fullname(self) -> str:
        """Return ``name`` if present, otherwise build the fullname from ``id``."""
        fullname = self.string("name")
        if not fullname:
            fullname = make_fullname(self.kind, self.string("id"))
        return fullname


def _build(model: Type[E], kind: Kind, fields: Dict[str, Any]) -> E:
    try:
        return model(**fields)
    except PydanticValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"]) or "data"
        raise MalformedField(field, kind.value, error["msg"]) from e


def decode_post(data: Dict[str, Any]) -> Post:
    """
    Decode a ``t3`` data object into a Post.

    Example:
        >>> post = decode_post({"id": "i2gvg4", "name": "t3_i2gvg4", "likes": True})
        >>> post.likes
        <Vote.UPVOTED: 'upvoted'>
    """
    f = FieldReader(Kind.POST, data)
    return _build(Post, Kind.POST, {
        "id": f.string("id"),
        "fullname": f.fullname(),
        "created": f.timestamp("created_utc"),
        "edited": f.edited(),
        "permalink": f.string("permalink"),
        "url": f.string("url"),
        "title": f.string("title"),
        "body": f.string("selftext"),
        "likes": f.vote(),
        "score": f.integer("score"),
        "upvote_ratio": f.ratio("upvote_ratio"),
        "num_comments": f.count("num_comments"),
        "subreddit_name": f.string("subreddit"),
        "subreddit_name_prefixed": f.string("subreddit_name_prefixed"),
        "subreddit_id": f.string("subreddit_id"),
        "subreddit_subscribers": f.count("subreddit_subscribers"),
        "author": f.string("author"),
        "author_id": f.string("author_fullname"),
        "spoiler": f.boolean("spoiler"),
        "locked": f.boolean("locked"),
        "nsfw": f.boolean("over_18"),
        "is_self_post": f.boolean("is_self"),
        "saved": f.boolean("saved"),
        "stickied": f.boolean("stickied"),
    })


def decode_comment(data: Dict[str, Any]) -> Comment:
    """Decode a ``t1`` data object into a Comment."""
    f = FieldReader(Kind.COMMENT, data)
    return _build(Comment, Kind.COMMENT, {
        "id": f.string("id"),
        "fullname": f.fullname(),
        "created": f.timestamp("created_utc"),
        "edited": f.edited(),
        "parent_id": f.string("parent_id"),
        "permalink": f.string("permalink"),
        "body": f.string("body"),
        "author": f.string("author"),
        "author_id": f.string("author_fullname"),
        "author_flair_text": f.string("author_flair_text"),
        "subreddit_name": f.string("subreddit"),
        "subreddit_name_prefixed": f.string("subreddit_name_prefixed"),
        "subreddit_id": f.string("subreddit_id"),
        "likes": f.vote(),
        "score": f.integer("score"),
        "controversiality": f.count("controversiality"),
        "post_id": f.string("link_id"),
        "post_title": f.string("link_title"),
        "post_permalink": f.string("link_permalink"),
        "post_author": f.string("link_author"),
        "post_num_comments": f.count("num_comments"),
        "is_submitter": f.boolean("is_submitter"),
        "score_hidden": f.boolean("score_hidden"),
        "saved": f.boolean("saved"),
        "stickied": f.boolean("stickied"),
        "locked": f.boolean("locked"),
        "can_gild": f.boolean("can_gild"),
        "nsfw": f.boolean("over_18"),
    })


_SUBREDDIT_FLAGS = (
    "allow_discovery",
    "allow_galleries",
    "allow_images",
    "allow_polls",
    "allow_videogifs",
    "allow_videos",
    "can_assign_link_flair",
    "can_assign_user_flair",
    "free_form_reports",
    "is_chat_post_feature_enabled",
    "is_crosspostable_subreddit",
    "link_flair_enabled",
    "restrict_posting",
    "show_media",
    "show_media_preview",
    "spoilers_enabled",
    "user_sr_theme_enabled",
    "quarantine",
    "user_is_subscriber",
    "user_is_moderator",
    "user_has_favorited",
)

_SUBREDDIT_STRINGS = (
    "url",
    "display_name",
    "display_name_prefixed",
    "title",
    "description",
    "description_html",
    "public_description",
    "subreddit_type",
    "submission_type",
    "lang",
    "link_flair_position",
    "notification_level",
    "user_flair_position",
    "user_flair_type",
    "whitelist_status",
)


def decode_subreddit(data: Dict[str, Any]) -> Subreddit:
    """Decode a ``t5`` data object into a Subreddit."""
    f = FieldReader(Kind.SUBREDDIT, data)
    fields: Dict[str, Any] = {
        "id": f.string("id"),
        "fullname": f.fullname(),
        "created": f.timestamp("created"),
        "created_utc": f.timestamp("created_utc"),
        "subscribers": f.count("subscribers"),
        "active_user_count": f.count("active_user_count"),
        "nsfw": f.boolean("over18"),
        "wls": f.count("wls"),
        "user_flair_richtext": f.object_list("user_flair_richtext"),
    }
    fields.update({name: f.string(name) for name in _SUBREDDIT_STRINGS})
    fields.update({name: f.boolean(name) for name in _SUBREDDIT_FLAGS})
    return _build(Subreddit, Kind.SUBREDDIT, fields)


def decode_account(data: Dict[str, Any]) -> Account:
    """Decode a ``t2`` data object into an Account."""
    f = FieldReader(Kind.ACCOUNT, data)

    # Account data carries the username in ``name``; the profile subreddit holds the NSFW flag.
    profile = data.get("subreddit")
    if profile is not None and not isinstance(profile, dict):
        raise MalformedField("subreddit", Kind.ACCOUNT.value, "expected an object")
    nsfw = FieldReader(Kind.ACCOUNT, profile or {}).boolean("over_18")

    local_id = f.string("id")
    return _build(Account, Kind.ACCOUNT, {
        "id": local_id,
        "fullname": make_fullname(Kind.ACCOUNT, local_id),
        "name": f.string("name"),
        "created": f.timestamp("created_utc"),
        "post_karma": f.integer("link_karma"),
        "comment_karma": f.integer("comment_karma"),
        "is_friend": f.boolean("is_friend"),
        "is_employee": f.boolean("is_employee"),
        "has_verified_email": f.boolean("has_verified_email"),
        "is_suspended": f.boolean("is_suspended"),
        "nsfw": nsfw,
    })


def decode_more(data: Dict[str, Any]) -> MoreComments:
    """Decode a ``more`` placeholder."""
    f = FieldReader(Kind.MORE, data)
    return _build(MoreComments, Kind.MORE, {
        "id": f.string("id"),
        "fullname": f.string("name"),
        "parent_id": f.string("parent_id"),
        "count": f.count("count"),
        "depth": f.count("depth"),
        "children": f.string_list("children"),
    })
