from typing import Any, List, Optional, Sequence

from ..utils import load_json, parse_datetime
from .base import BooruDialect, escape
from .errors import DecodeError
from .options import Capability, UrlFormat
from .types import (
    AutocompleteSuggestion,
    Comment,
    Post,
    RelatedTag,
    Tag,
    WikiEntry,
    get_rating,
    get_tag_category,
)


class DanbooruDialect(BooruDialect):
    """
    Dialect for Danbooru-style APIs.
    """

    url_format = UrlFormat.DANBOORU
    supports = frozenset({
        Capability.comment,
        Capability.last_comments,
        Capability.related,
        Capability.wiki,
        Capability.autocomplete,
    })

    def post_by_id_url(self, post_id: int) -> str:
        return f"{self.base_url}posts/{post_id}.json"

    def post_count_url(self, tags: Sequence[str]) -> str:
        return self.query.create_url(self.endpoints.post_count, self.query.tags_to_string(tags))

    def related_url(self, tag: str) -> str:
        return self.query.create_url(self.endpoints.related, f"query={escape(tag)}")

    def wiki_url(self, title: str) -> str:
        return self.query.create_url(self.endpoints.wiki, self.query.search_arg("title") + escape(title))

    def tags_url(self, pattern: str) -> str:
        return self.query.create_url(self.endpoints.tag, self.query.search_arg("name_matches") + escape(pattern))

    def autocomplete_url(self, query: str) -> str:
        return self.query.create_url(self.endpoints.autocomplete, self.query.search_arg("name_matches") + escape(query) + "*")

    def parse_post_count(self, text: str) -> int:
        # {"counts": {"posts": 1234}}
        return int(load_json(text)["counts"]["posts"])

    def first_post(self, payload: Any) -> dict:
        if isinstance(payload, dict) and payload.get("success") is False:
            raise DecodeError(f"Danbooru error: {payload.get('message')}")
        return super().first_post(payload)

    def related_list(self, payload: Any) -> List[Any]:
        if "related_tags" in payload:
            return payload["related_tags"]
        return payload["tags"]

    def decode_post(self, data: dict) -> Post:
        post_id = int(data["id"])
        return Post(
            id=post_id,
            post_url=f"{self.base_url}posts/{post_id}",
            file_url=data.get("file_url"),
            preview_url=data.get("preview_file_url"),
            sample_url=data.get("large_file_url"),
            rating=get_rating(data["rating"]),
            tags=data["tag_string"].split(),
            hash=data.get("md5"),
            width=data.get("image_width"),
            height=data.get("image_height"),
            created_at=parse_datetime(data.get("created_at")),
            source=data.get("source") or None,
            score=data.get("score"),
            parent_id=data.get("parent_id"),
        )

    def decode_comment(self, data: dict, post_id: Optional[int] = None) -> Comment:
        creator = data.get("creator") or {}
        return Comment(
            comment_id=data["id"],
            post_id=data["post_id"],
            author_id=data.get("creator_id"),
            author_name=data.get("creator_name") or creator.get("name"),
            body=data["body"],
            created_at=parse_datetime(data["created_at"]),
        )

    def decode_tag(self, data: dict) -> Tag:
        return Tag(
            id=data["id"],
            name=data["name"],
            category=get_tag_category(data["category"]),
            count=data["post_count"],
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
        if isinstance(data, dict):
            # Current API: {"tag": {"name": ..., "category": ..., "post_count": ...}, ...}
            tag = data["tag"]
            return RelatedTag(
                name=tag["name"],
                count=tag.get("post_count"),
                category=get_tag_category(tag["category"]) if "category" in tag else None,
            )
        # Legacy API: ["name", count]
        return RelatedTag(name=data[0], count=int(data[1]))

    def decode_autocomplete(self, data: dict) -> AutocompleteSuggestion:
        name = data.get("name") or data["value"]
        category = data.get("category")
        return AutocompleteSuggestion(
            name=name,
            label=data.get("label") or name,
            count=data.get("post_count"),
            category=get_tag_category(category) if category is not None else None,
        )
