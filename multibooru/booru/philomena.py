from typing import Any, Dict, List, Optional, Sequence

from ..utils import load_json, parse_datetime
from .base import BooruDialect, escape
from .errors import PostNotFound
from .options import Capability, UrlFormat
from .selection import DirectRandom, RandomPlan
from .types import BooruAuth, Comment, Post, Rating, Tag, TagCategory, get_rating

# Philomena has no rating field; the rating is one of the post's tags.
# Checked in order, so the strongest rating wins.
RATING_TAGS = (
    ("explicit", "e"),
    ("questionable", "q"),
    ("suggestive", "q"),
    ("safe", "s"),
)

PHILOMENA_CATEGORY_MAP: Dict[str, TagCategory] = {
    "origin": TagCategory.artist,
    "character": TagCategory.character,
    "oc": TagCategory.character,
    "content-official": TagCategory.copyright,
    "content-fanmade": TagCategory.copyright,
    "species": TagCategory.species,
    "rating": TagCategory.meta,
    "spoiler": TagCategory.meta,
    "error": TagCategory.meta,
}


def rating_from_tags(tags: Sequence[str]) -> Rating:
    for tag, letter in RATING_TAGS:
        if tag in tags:
            return get_rating(letter)
    raise ValueError("Post has no rating tag")


class PhilomenaDialect(BooruDialect):
    """Dialect for Philomena boorus (api/v1/json): Derpibooru, Ponybooru."""

    url_format = UrlFormat.PHILOMENA
    supports = frozenset({Capability.comment, Capability.last_comments})

    # Keys wrapping a single post and a post collection.
    post_key = "image"
    posts_key = "images"

    def post_page_url(self, post_id: int) -> str:
        return f"{self.base_url}images/{post_id}"

    def post_by_id_url(self, post_id: int) -> str:
        return f"{self.base_url}api/v1/json/images/{post_id}"

    def post_count_url(self, tags: Sequence[str]) -> str:
        return self.query.create_url(self.endpoints.post_count, self.query.limit(1), self.query.tags_to_string(tags))

    def random_post_plan(self, tags: Sequence[str], auth: Optional[BooruAuth]) -> RandomPlan:
        return DirectRandom(self.query.create_url(
            self.endpoints.image,
            self.query.limit(1),
            self.query.tags_to_string(tags),
            "random=true",
            *self.login_args(auth),
        ))

    def random_posts_url(self, limit: int, tags: Sequence[str]) -> str:
        return self.query.create_url(
            self.endpoints.image, self.query.limit(limit), self.query.tags_to_string(tags), "sf=random"
        )

    def comments_url(self, post_id: int) -> str:
        return self.query.create_url(self.endpoints.comment, f"q=image_id:{post_id}")

    def tag_url(self, name: str) -> str:
        return self.query.create_url(self.endpoints.tag, f"q=name:{escape(name)}")

    def tags_url(self, pattern: str) -> str:
        return self.query.create_url(self.endpoints.tag, f"q=name:{escape(pattern)}")

    def parse_post_count(self, text: str) -> int:
        return int(load_json(text)["total"])

    def post_list(self, payload: Any) -> List[dict]:
        return payload[self.posts_key]

    def first_post(self, payload: Any) -> dict:
        if self.post_key in payload:
            return payload[self.post_key]
        posts = self.post_list(payload)
        if not posts:
            raise PostNotFound("No post matches this query")
        return posts[0]

    def comment_list(self, payload: Any) -> List[dict]:
        return payload["comments"]

    def tag_list(self, payload: Any) -> List[dict]:
        return payload["tags"]

    def decode_post(self, data: dict) -> Post:
        post_id = int(data["id"])
        tags = data["tags"]
        representations = data.get("representations") or {}
        return Post(
            id=post_id,
            post_url=self.post_page_url(post_id),
            file_url=representations.get("full") or data.get("view_url"),
            preview_url=representations.get("thumb"),
            sample_url=representations.get("large"),
            rating=rating_from_tags(tags),
            tags=tags,
            hash=data.get("sha512_hash"),
            width=data.get("width"),
            height=data.get("height"),
            created_at=parse_datetime(data.get("created_at")),
            source=data.get("source_url") or None,
            score=data.get("score"),
        )

    def decode_comment(self, data: dict, post_id: Optional[int] = None) -> Comment:
        return Comment(
            comment_id=data["id"],
            post_id=data["image_id"],
            author_id=data.get("user_id"),
            author_name=data.get("author"),
            body=data["body"],
            created_at=parse_datetime(data["created_at"]),
        )

    def decode_tag(self, data: dict) -> Tag:
        return Tag(
            id=data["id"],
            name=data["name"],
            category=PHILOMENA_CATEGORY_MAP.get(data.get("category"), TagCategory.general),
            count=data["images"],
        )
