from abc import ABC
from typing import Any, Dict, FrozenSet, List, Optional, Sequence
from urllib.parse import quote

from ..utils import load_json, load_xml, xml_records
from .endpoints import Endpoints
from .errors import DecodeError, FeatureUnavailable, PostNotFound
from .options import BooruOptions, Capability, UrlFormat
from .query import QueryBuilder
from .selection import DirectRandom, RandomPlan
from .types import AutocompleteSuggestion, BooruAuth, Comment, Post, RelatedTag, Tag, WikiEntry

# Operations that need a decoder not every dialect implements.
OPTIONAL_RESOURCES: FrozenSet[Capability] = frozenset({
    Capability.comment,
    Capability.last_comments,
    Capability.related,
    Capability.wiki,
    Capability.autocomplete,
})


def escape(value: Any) -> str:
    """Percent-escape a single query value, keeping search wildcards."""
    return quote(str(value), safe="*")


class BooruDialect(ABC):
    """
    Abstract base for booru dialects.

    A dialect knows how one URL grammar spells each request and how its
    responses are shaped. The defaults below follow the most common grammar;
    subclasses override what differs and list the optional resources they
    decode in ``supports``. Decoders a grammar does not support raise
    FeatureUnavailable.
    """

    url_format: UrlFormat

    # Optional resources this dialect can decode.
    supports: FrozenSet[Capability] = frozenset()

    # Whether comment payloads carry the post id they belong to.
    comments_carry_post_id = True

    def __init__(self, endpoints: Endpoints, options: BooruOptions = BooruOptions.NONE):
        self.endpoints = endpoints
        self.options = options
        self.query = QueryBuilder(self.url_format)

    @property
    def base_url(self) -> str:
        return self.endpoints.base_url

    @property
    def no_more_than_two_tags(self) -> bool:
        return bool(self.options & BooruOptions.NO_MORE_THAN_2_TAGS)

    def is_supported(self, capability: Capability) -> bool:
        return capability not in OPTIONAL_RESOURCES or capability in self.supports

    def auth_headers(self, auth: Optional[BooruAuth]) -> Dict[str, str]:
        """Extra headers for authenticated requests."""
        return {}

    def login_args(self, auth: Optional[BooruAuth]) -> List[str]:
        if auth is None:
            return []
        return [f"login={escape(auth.user_id)}", f"api_key={escape(auth.password_hash)}"]

    # Request URIs

    def post_by_md5_url(self, md5: str) -> str:
        return self.query.create_url(self.endpoints.image, self.query.limit(1), f"md5={escape(md5)}")

    def post_by_id_url(self, post_id: int) -> str:
        return self.query.create_url(self.endpoints.image, self.query.limit(1), f"id={post_id}")

    def post_count_url(self, tags: Sequence[str]) -> str:
        return self.query.create_url(self.endpoints.post_count, self.query.limit(1), self.query.tags_to_string(tags))

    def random_post_plan(self, tags: Sequence[str], auth: Optional[BooruAuth]) -> RandomPlan:
        # random=true does not count against the tag limit, order:random does.
        marker = "random=true" if self.no_more_than_two_tags else "order=random"
        return DirectRandom(self.query.create_url(
            self.endpoints.image,
            self.query.limit(1),
            self.query.tags_to_string(tags),
            marker,
            *self.login_args(auth),
        ))

    def random_posts_url(self, limit: int, tags: Sequence[str]) -> str:
        tag_string = self.query.tags_to_string(tags)
        if self.no_more_than_two_tags:
            return self.query.create_url(self.endpoints.image, self.query.limit(limit), tag_string, "random=true")
        return self.query.create_url(self.endpoints.image, self.query.limit(limit), tag_string) + "+order:random"

    def last_posts_url(self, tags: Sequence[str], limit: Optional[int] = None) -> str:
        args = [self.query.limit(limit)] if limit is not None else []
        return self.query.create_url(self.endpoints.image, *args, self.query.tags_to_string(tags))

    def comments_url(self, post_id: int) -> str:
        return self.query.create_url(self.endpoints.comment, self.query.search_arg("post_id") + str(post_id))

    def last_comments_url(self) -> str:
        return self.query.create_url(self.endpoints.comment)

    def related_url(self, tag: str) -> str:
        return self.query.create_url(self.endpoints.related, f"tags={escape(tag)}")

    def wiki_url(self, title: str) -> str:
        return self.query.create_url(self.endpoints.wiki, self.query.search_arg("query") + escape(title))

    def tag_url(self, name: str) -> str:
        return self.query.create_url(self.endpoints.tag, self.query.search_arg("name") + escape(name))

    def tag_by_id_url(self, tag_id: int) -> str:
        return self.query.create_url(self.endpoints.tag, self.query.search_arg("id") + str(tag_id))

    def tags_url(self, pattern: str) -> str:
        return self.query.create_url(self.endpoints.tag, self.query.search_arg("name") + escape(pattern))

    def autocomplete_url(self, query: str) -> str:
        return self.query.create_url(self.endpoints.autocomplete, f"q={escape(query)}")

    # Response decoding

    def load(self, text: str) -> Any:
        return load_json(text)

    def post_list(self, payload: Any) -> List[dict]:
        if not isinstance(payload, list):
            raise DecodeError(f"Expected a list of posts, got {type(payload).__name__}")
        return payload

    def first_post(self, payload: Any) -> dict:
        if isinstance(payload, dict):
            return payload
        posts = self.post_list(payload)
        if not posts:
            raise PostNotFound("No post matches this query")
        return posts[0]

    def parse_post_count(self, text: str) -> int:
        root = load_xml(text)
        return int(root.attrib["count"])

    def comment_records(self, text: str) -> List[dict]:
        if self.options & BooruOptions.COMMENT_API_XML:
            return xml_records(load_xml(text))
        return self.comment_list(self.load(text))

    def tag_records(self, text: str) -> List[dict]:
        if self.options & BooruOptions.TAG_API_XML:
            return xml_records(load_xml(text))
        return self.tag_list(self.load(text))

    def comment_list(self, payload: Any) -> List[dict]:
        return payload

    def tag_list(self, payload: Any) -> List[dict]:
        return payload

    def wiki_list(self, payload: Any) -> List[dict]:
        return payload

    def related_list(self, payload: Any) -> List[Any]:
        return payload

    def autocomplete_list(self, payload: Any) -> List[dict]:
        return payload

    def decode_post(self, data: dict) -> Post:
        raise FeatureUnavailable("post")

    def decode_comment(self, data: dict, post_id: Optional[int] = None) -> Comment:
        raise FeatureUnavailable("comment")

    def decode_tag(self, data: dict) -> Tag:
        raise FeatureUnavailable("tag")

    def decode_wiki(self, data: dict) -> WikiEntry:
        raise FeatureUnavailable("wiki")

    def decode_related(self, data: Any) -> RelatedTag:
        raise FeatureUnavailable("related")

    def decode_autocomplete(self, data: dict) -> AutocompleteSuggestion:
        raise FeatureUnavailable("autocomplete")

    def absolute_url(self, url: Optional[str]) -> Optional[str]:
        """Resolve protocol-relative and site-relative file URLs."""
        if not url:
            return None
        if url.startswith("//"):
            return self.base_url.split(":", 1)[0] + ":" + url
        if not url.startswith("http"):
            return self.base_url + url.lstrip("/")
        return url
