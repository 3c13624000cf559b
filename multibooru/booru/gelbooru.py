import re
from typing import Any, List, Optional, Sequence

from ..utils import parse_datetime
from .base import BooruDialect, escape
from .errors import DecodeError
from .options import BooruOptions, Capability, UrlFormat
from .selection import DirectRandom, OffsetRandom, RandomPlan, RedirectRandom
from .types import AutocompleteSuggestion, BooruAuth, Comment, Post, Tag, get_rating, get_tag_category

# Gelbooru refuses offsets past this many posts.
INCREASED_POST_LIMIT_COUNT = 20001

AUTOCOMPLETE_COUNT_PATTERN = re.compile(r"\((\d+)\)\s*$")


class IndexPhpDialect(BooruDialect):
    """
    Dialect for Gelbooru v0.2 style APIs (index.php?page=dapi...).
    Used by Safebooru (classic), Rule34, Xbooru, Realbooru and many others.
    """

    url_format = UrlFormat.INDEX_PHP
    supports = frozenset({Capability.comment, Capability.last_comments, Capability.autocomplete})

    @property
    def image_xml_url(self) -> str:
        return self.endpoints.image.replace("json=1", "json=0")

    def post_count_url(self, tags: Sequence[str]) -> str:
        return self.query.create_url(self.image_xml_url, self.query.limit(1), self.query.tags_to_string(tags))

    def random_post_plan(self, tags: Sequence[str], auth: Optional[BooruAuth]) -> RandomPlan:
        tag_string = self.query.tags_to_string(tags)

        if not tags:
            # The site's random page redirects to a post, which tells us its id.
            return RedirectRandom(
                redirect_url=f"{self.base_url}index.php?page=post&s=random&{tag_string}",
                build_final_url=self.post_by_id_url,
            )

        # The random page ignores tags, so count the matches and pick an offset.
        return OffsetRandom(
            count_url=self.post_count_url(tags),
            build_final_url=lambda offset: self.query.create_url(
                self.endpoints.image, self.query.limit(1), tag_string, f"pid={offset}"
            ),
            max_offset=INCREASED_POST_LIMIT_COUNT if self.options & BooruOptions.LIMIT_OF_20000 else None,
        )

    def random_posts_url(self, limit: int, tags: Sequence[str]) -> str:
        return self.query.create_url(
            self.endpoints.image, self.query.limit(limit), self.query.tags_to_string(tags)
        ) + "+sort:random"

    def tags_url(self, pattern: str) -> str:
        return self.query.create_url(self.endpoints.tag, f"name_pattern={escape(pattern)}")

    def load(self, text: str) -> Any:
        # Gelbooru 0.2 answers an empty body when nothing matches.
        if not text.strip():
            return []
        return super().load(text)

    def post_list(self, payload: Any) -> List[dict]:
        if isinstance(payload, dict):
            # Gelbooru 0.2.5 wraps results: {"@attributes": {...}, "post": [...]}
            if "post" not in payload and "@attributes" not in payload:
                raise DecodeError("Unexpected post payload")
            posts = payload.get("post", [])
            return posts if isinstance(posts, list) else [posts]
        return super().post_list(payload)

    def first_post(self, payload: Any) -> dict:
        if isinstance(payload, dict):
            payload = self.post_list(payload)
        return super().first_post(payload)

    def tag_list(self, payload: Any) -> List[dict]:
        if isinstance(payload, dict):
            tags = payload.get("tag", [])
            return tags if isinstance(tags, list) else [tags]
        return payload

    def _file_url(self, data: dict) -> Optional[str]:
        file_url = data.get("file_url")
        if file_url:
            return self.absolute_url(file_url)
        if data.get("directory") and data.get("image"):
            return f"{self.base_url}images/{data['directory']}/{data['image']}"
        return None

    def decode_post(self, data: dict) -> Post:
        post_id = int(data["id"])
        # Ratings come as letters or words ("general", "sensitive", "explicit").
        rating = get_rating(str(data["rating"])[:1])

        return Post(
            id=post_id,
            post_url=f"{self.base_url}index.php?page=post&s=view&id={post_id}",
            file_url=self._file_url(data),
            preview_url=self.absolute_url(data.get("preview_url")),
            sample_url=self.absolute_url(data.get("sample_url")),
            rating=rating,
            tags=data["tags"].split(),
            hash=data.get("md5") or data.get("hash"),
            width=int(data["width"]) if data.get("width") else None,
            height=int(data["height"]) if data.get("height") else None,
            created_at=parse_datetime(data.get("created_at")) or parse_datetime(data.get("change")),
            source=data.get("source") or None,
            score=int(data["score"]) if data.get("score") not in (None, "") else None,
            parent_id=int(data["parent_id"]) if data.get("parent_id") else None,
        )

    def decode_comment(self, data: dict, post_id: Optional[int] = None) -> Comment:
        return Comment(
            comment_id=int(data["id"]),
            post_id=int(data["post_id"]),
            author_id=int(data["creator_id"]) if data.get("creator_id") else None,
            author_name=data.get("creator") or None,
            body=data["body"],
            created_at=parse_datetime(data["created_at"]),
        )

    def decode_tag(self, data: dict) -> Tag:
        return Tag(
            id=int(data["id"]),
            name=data["name"],
            category=get_tag_category(data["type"]),
            count=int(data["count"]),
        )

    def decode_autocomplete(self, data: dict) -> AutocompleteSuggestion:
        label = data.get("label") or data["value"]
        match = AUTOCOMPLETE_COUNT_PATTERN.search(label)
        return AutocompleteSuggestion(
            name=data["value"],
            label=label,
            count=int(match.group(1)) if match else None,
        )


class GelbooruDialect(IndexPhpDialect):
    """gelbooru.com itself, which sorts randomly server side."""

    def random_post_plan(self, tags: Sequence[str], auth: Optional[BooruAuth]) -> RandomPlan:
        args = [self.query.limit(1), self.query.tags_to_string(tags), "sort=random"]
        if auth is not None:
            args += [f"api_key={escape(auth.password_hash)}", f"user_id={escape(auth.user_id)}"]
        return DirectRandom(self.query.create_url(self.endpoints.image, *args))
