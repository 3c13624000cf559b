from typing import Any, Dict, List, Optional

from ..utils import parse_datetime
from .base import BooruDialect
from .options import Capability, UrlFormat
from .types import BooruAuth, Comment, Post, Tag, WikiEntry, get_rating, get_tag_category

POST_PAGE_URL = "https://chan.sankakucomplex.com/post/show/{}"


def _tag_name(tag: dict) -> str:
    return tag.get("name") or tag["name_en"]


class SankakuDialect(BooruDialect):
    """Dialect for the Sankaku Complex API (capi-v2)."""

    url_format = UrlFormat.SANKAKU
    supports = frozenset({Capability.comment, Capability.last_comments, Capability.wiki})

    def auth_headers(self, auth: Optional[BooruAuth]) -> Dict[str, str]:
        if auth is None:
            return {}
        return {"Authorization": f"Bearer {auth.password_hash}"}

    def post_list(self, payload: Any) -> List[dict]:
        if isinstance(payload, dict) and "data" in payload:
            return payload["data"]
        return super().post_list(payload)

    def first_post(self, payload: Any) -> dict:
        if isinstance(payload, dict) and "data" in payload:
            payload = payload["data"]
        return super().first_post(payload)

    def decode_post(self, data: dict) -> Post:
        post_id = int(data["id"])
        return Post(
            id=post_id,
            post_url=POST_PAGE_URL.format(post_id),
            file_url=data.get("file_url"),
            preview_url=data.get("preview_url"),
            sample_url=data.get("sample_url"),
            rating=get_rating(data["rating"]),
            tags=[_tag_name(tag) for tag in data["tags"]],
            hash=data.get("md5"),
            width=data.get("width"),
            height=data.get("height"),
            created_at=parse_datetime(data.get("created_at")),
            source=data.get("source") or None,
            score=data.get("total_score"),
            parent_id=data.get("parent_id"),
        )

    def decode_comment(self, data: dict, post_id: Optional[int] = None) -> Comment:
        author = data.get("author") or {}
        return Comment(
            comment_id=data["id"],
            post_id=data["post_id"],
            author_id=author.get("id"),
            author_name=author.get("name"),
            body=data["body"],
            created_at=parse_datetime(data["created_at"]),
        )

    def decode_tag(self, data: dict) -> Tag:
        return Tag(
            id=data["id"],
            name=_tag_name(data),
            category=get_tag_category(data["type"]),
            count=data.get("count", data.get("post_count")),
        )

    def decode_wiki(self, data: dict) -> WikiEntry:
        return WikiEntry(
            id=data["id"],
            title=data["title"],
            body=data["body"],
            created_at=parse_datetime(data.get("created_at")),
            updated_at=parse_datetime(data.get("updated_at")),
        )
