from typing import Any, List, Optional

from ..utils import parse_datetime
from .base import BooruDialect
from .options import Capability, UrlFormat
from .types import Comment, Post, RelatedTag, Tag, WikiEntry, get_rating, get_tag_category


class PostIndexJsonDialect(BooruDialect):
    """Dialect for Moebooru sites (post/index.json): Yande.re, Konachan, Lolibooru, Sakugabooru."""

    url_format = UrlFormat.POST_INDEX_JSON
    supports = frozenset({Capability.comment, Capability.last_comments, Capability.related, Capability.wiki})

    def post_by_id_url(self, post_id: int) -> str:
        return f"{self.endpoints.image}?tags=id:{post_id}"

    def related_list(self, payload: Any) -> List[Any]:
        # {"<queried tag>": [["name", "count"], ...]}
        return next(iter(payload.values()))

    def decode_post(self, data: dict) -> Post:
        post_id = int(data["id"])
        return Post(
            id=post_id,
            post_url=f"{self.base_url}post/show/{post_id}",
            file_url=self.absolute_url(data.get("file_url")),
            preview_url=self.absolute_url(data.get("preview_url")),
            sample_url=self.absolute_url(data.get("sample_url")),
            rating=get_rating(data["rating"]),
            tags=data["tags"].split(),
            hash=data.get("md5"),
            width=data.get("width"),
            height=data.get("height"),
            created_at=parse_datetime(data.get("created_at")),
            source=data.get("source") or None,
            score=data.get("score"),
            parent_id=data.get("parent_id"),
        )

    def decode_comment(self, data: dict, post_id: Optional[int] = None) -> Comment:
        return Comment(
            comment_id=data["id"],
            post_id=data["post_id"],
            author_id=data.get("creator_id"),
            author_name=data.get("creator"),
            body=data["body"],
            created_at=parse_datetime(data["created_at"]),
        )

    def decode_tag(self, data: dict) -> Tag:
        return Tag(
            id=data["id"],
            name=data["name"],
            category=get_tag_category(data["type"]),
            count=data["count"],
        )

    def decode_wiki(self, data: dict) -> WikiEntry:
        return WikiEntry(
            id=data["id"],
            title=data["title"],
            body=data["body"],
            created_at=parse_datetime(data.get("created_at")),
            updated_at=parse_datetime(data.get("updated_at")),
        )

    def decode_related(self, data: Any) -> RelatedTag:
        return RelatedTag(name=data[0], count=int(data[1]))
