from typing import Optional

from ..utils import parse_datetime
from .options import UrlFormat
from .philomena import PhilomenaDialect
from .types import Comment


class BooruOnRailsDialect(PhilomenaDialect):
    """Dialect for Booru-on-Rails (api/v3): Twibooru."""

    url_format = UrlFormat.BOORU_ON_RAILS
    comments_carry_post_id = False

    post_key = "post"
    posts_key = "posts"

    def post_page_url(self, post_id: int) -> str:
        return f"{self.base_url}{post_id}"

    def post_by_id_url(self, post_id: int) -> str:
        return f"{self.base_url}api/v3/posts/{post_id}"

    def comments_url(self, post_id: int) -> str:
        return f"{self.base_url}api/v3/posts/{post_id}/comments"

    def decode_comment(self, data: dict, post_id: Optional[int] = None) -> Comment:
        # The payload has no post id, the caller knows it.
        return Comment(
            comment_id=data["id"],
            post_id=data.get("post_id", post_id),
            author_id=data.get("user_id"),
            author_name=data.get("author"),
            body=data["body"],
            created_at=parse_datetime(data["created_at"]),
        )
