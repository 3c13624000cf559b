import logging
import random
from typing import Any, Callable, Dict, List, Optional, Type, TypeVar

from .base import BooruDialect
from .booru_on_rails import BooruOnRailsDialect
from .danbooru import DanbooruDialect
from .endpoints import Endpoints, resolve_endpoints
from .errors import DecodeError, FeatureUnavailable, InvalidTags
from .gelbooru import IndexPhpDialect
from .moebooru import PostIndexJsonDialect
from .options import BooruOptions, Capability, CapabilityGate, UrlFormat
from .philomena import PhilomenaDialect
from .sankaku import SankakuDialect
from .selection import DirectRandom, OffsetRandom, RandomPlan, RedirectRandom
from .transport import HttpTransport
from .types import AutocompleteSuggestion, BooruAuth, Comment, Post, RelatedTag, Tag, WikiEntry

logger = logging.getLogger(__name__)

T = TypeVar("T")

DIALECTS: Dict[UrlFormat, Type[BooruDialect]] = {
    UrlFormat.INDEX_PHP: IndexPhpDialect,
    UrlFormat.DANBOORU: DanbooruDialect,
    UrlFormat.PHILOMENA: PhilomenaDialect,
    UrlFormat.BOORU_ON_RAILS: BooruOnRailsDialect,
    UrlFormat.POST_INDEX_JSON: PostIndexJsonDialect,
    UrlFormat.SANKAKU: SankakuDialect,
}

_DECODE_ERRORS = (KeyError, IndexError, TypeError, ValueError, AttributeError, StopIteration)


def _require(value: Any, name: str) -> None:
    if value is None:
        raise ValueError(f"{name} must not be None")
    if isinstance(value, str) and not value.strip():
        raise ValueError(f"{name} must not be blank")


def _require_positive(value: Optional[int], name: str) -> None:
    _require(value, name)
    if value < 1:
        raise ValueError(f"{name} must be at least 1, got {value}")


class Booru:
    """
    Client for one booru, whatever API dialect it speaks.

    Built once per site and safe to share between concurrent tasks: the
    format, options and endpoints never change after construction. Every
    operation checks the site's capabilities before touching the network.
    """

    def __init__(
        self,
        domain: str,
        url_format: UrlFormat,
        options: BooruOptions = BooruOptions.NONE,
        auth: Optional[BooruAuth] = None,
        transport: Optional[HttpTransport] = None,
        rng: Optional[random.Random] = None,
        dialect_class: Optional[Type[BooruDialect]] = None,
        is_safe: bool = False,
    ):
        if dialect_class is None:
            dialect_class = DIALECTS[url_format]
        elif dialect_class.url_format is not url_format:
            raise ValueError(f"{dialect_class.__name__} does not speak {url_format.value}")

        self.domain = domain
        self.url_format = url_format
        self.options = options
        self.auth = auth
        self.is_safe = is_safe
        self.transport = transport or HttpTransport()
        self.rng = rng or random.SystemRandom()

        self._gate = CapabilityGate(options)
        self._endpoints = resolve_endpoints(domain, url_format, options)
        self._dialect = dialect_class(self._endpoints, options)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.domain} ({self.url_format.value})>"

    async def __aenter__(self) -> "Booru":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.transport.aclose()

    @property
    def endpoints(self) -> Endpoints:
        return self._endpoints

    @property
    def base_url(self) -> str:
        return self._endpoints.base_url

    def _supports(self, capability: Capability) -> bool:
        return self._gate.is_enabled(capability) and self._dialect.is_supported(capability)

    @property
    def has_related_api(self) -> bool:
        return self._supports(Capability.related)

    @property
    def has_wiki_api(self) -> bool:
        return self._supports(Capability.wiki)

    @property
    def has_comment_api(self) -> bool:
        return self._supports(Capability.comment)

    @property
    def has_tag_by_id_api(self) -> bool:
        return self._gate.is_enabled(Capability.tag_by_id)

    @property
    def has_search_last_comment(self) -> bool:
        return self._supports(Capability.last_comments)

    @property
    def has_post_by_md5_api(self) -> bool:
        return self._gate.is_enabled(Capability.post_by_md5)

    @property
    def has_post_by_id_api(self) -> bool:
        return self._gate.is_enabled(Capability.post_by_id)

    @property
    def has_post_count_api(self) -> bool:
        return self._gate.is_enabled(Capability.post_count) and self._endpoints.post_count is not None

    @property
    def has_multiple_random_api(self) -> bool:
        return self._gate.is_enabled(Capability.multiple_random)

    @property
    def has_favorite_api(self) -> bool:
        return self._gate.is_enabled(Capability.favorite)

    @property
    def has_autocomplete_api(self) -> bool:
        return self._supports(Capability.autocomplete) and self._endpoints.autocomplete is not None

    @property
    def no_empty_post_search(self) -> bool:
        """Whether post searches need at least one tag on this booru."""
        return bool(self.options & BooruOptions.NO_EMPTY_POST_SEARCH)

    @property
    def no_more_than_two_tags(self) -> bool:
        return bool(self.options & BooruOptions.NO_MORE_THAN_2_TAGS)

    def _check_endpoint(self, endpoint: Optional[str], capability: Capability) -> str:
        self._gate.check(capability)
        if endpoint is None or not self._dialect.is_supported(capability):
            raise FeatureUnavailable(capability.value)
        return endpoint

    def _decode(self, decoder: Callable[..., T], *args: Any) -> T:
        try:
            return decoder(*args)
        except _DECODE_ERRORS as e:
            logger.warning(f"Could not decode response from {self.domain}: {e!r}")
            raise DecodeError(f"Unexpected response from {self.domain}: {e}") from e

    async def _fetch(self, url: str) -> str:
        return await self.transport.fetch(url, headers=self._dialect.auth_headers(self.auth) or None)

    async def _fetch_post(self, url: str) -> Post:
        text = await self._fetch(url)
        return self._decode(lambda: self._dialect.decode_post(self._dialect.first_post(self._dialect.load(text))))

    async def _fetch_posts(self, url: str) -> List[Post]:
        text = await self._fetch(url)
        return self._decode(
            lambda: [self._dialect.decode_post(data) for data in self._dialect.post_list(self._dialect.load(text))]
        )

    async def get_post_by_md5(self, md5: str) -> Post:
        """Search for a post using its MD5 hash."""
        self._gate.check(Capability.post_by_md5)
        _require(md5, "md5")
        return await self._fetch_post(self._dialect.post_by_md5_url(md5))

    async def get_post_by_id(self, post_id: int) -> Post:
        """Search for a post using its ID."""
        self._gate.check(Capability.post_by_id)
        _require(post_id, "post_id")
        return await self._fetch_post(self._dialect.post_by_id_url(post_id))

    async def get_post_count(self, *tags: str) -> int:
        """
        Total number of posts, or of posts carrying all of ``tags``.

        Raises TooManyTags on two-tag sites when more than two tags are given.
        """
        self._check_endpoint(self._endpoints.post_count, Capability.post_count)
        tags = self._gate.check_tags(tags)
        text = await self._fetch(self._dialect.post_count_url(tags))
        return self._decode(self._dialect.parse_post_count, text)

    async def get_random_post(self, *tags: str) -> Post:
        """A random post, optionally restricted to posts carrying all of ``tags``."""
        tags = self._gate.check_tags(tags)
        plan = self._dialect.random_post_plan(tags, self.auth)
        return await self._run_random_plan(plan)

    async def _run_random_plan(self, plan: RandomPlan) -> Post:
        if isinstance(plan, DirectRandom):
            return await self._fetch_post(plan.url)

        if isinstance(plan, RedirectRandom):
            final_url = await self.transport.fetch_redirect_url(
                plan.redirect_url, headers=self._dialect.auth_headers(self.auth) or None
            )
            post_id = plan.post_id_from(final_url)
            logger.debug(f"Random redirect on {self.domain} picked post {post_id}")
            return await self._fetch_post(plan.build_final_url(post_id))

        if isinstance(plan, OffsetRandom):
            text = await self._fetch(plan.count_url)
            count = self._decode(self._dialect.parse_post_count, text)
            offset = plan.pick_offset(count, self.rng)
            logger.debug(f"Random offset on {self.domain}: {offset} of {count}")
            return await self._fetch_post(plan.build_final_url(offset))

        raise TypeError(f"Unknown random plan {plan!r}")

    async def get_random_posts(self, limit: int, *tags: str) -> List[Post]:
        """Up to ``limit`` random posts carrying all of ``tags``."""
        self._gate.check(Capability.multiple_random)
        _require_positive(limit, "limit")
        tags = self._gate.check_tags(tags)
        return await self._fetch_posts(self._dialect.random_posts_url(limit, tags))

    async def get_last_posts(self, *tags: str, limit: Optional[int] = None) -> List[Post]:
        """Latest posts, optionally restricted to ``tags``."""
        if limit is not None:
            _require_positive(limit, "limit")
        tags = self._gate.check_tags(tags)
        return await self._fetch_posts(self._dialect.last_posts_url(tags, limit))

    async def get_comments(self, post_id: int) -> List[Comment]:
        """Comments posted on a post."""
        self._check_endpoint(self._endpoints.comment, Capability.comment)
        _require(post_id, "post_id")
        text = await self._fetch(self._dialect.comments_url(post_id))
        comments = self._decode(
            lambda: [self._dialect.decode_comment(data, post_id) for data in self._dialect.comment_records(text)]
        )
        if not self._dialect.comments_carry_post_id:
            return comments
        # Some APIs ignore the post filter and answer with every comment.
        return [comment for comment in comments if comment.post_id == post_id]

    async def get_last_comments(self) -> List[Comment]:
        """Latest comments on the whole site."""
        self._check_endpoint(self._endpoints.comment, Capability.last_comments)
        text = await self._fetch(self._dialect.last_comments_url())
        return self._decode(
            lambda: [self._dialect.decode_comment(data) for data in self._dialect.comment_records(text)]
        )

    async def get_related(self, tag: str) -> List[RelatedTag]:
        """Tags related to ``tag``."""
        self._check_endpoint(self._endpoints.related, Capability.related)
        _require(tag, "tag")
        text = await self._fetch(self._dialect.related_url(tag))
        return self._decode(
            lambda: [self._dialect.decode_related(data) for data in self._dialect.related_list(self._dialect.load(text))]
        )

    async def get_wiki(self, title: str) -> WikiEntry:
        """
        Wiki page of a tag.

        The wiki search is fuzzy, so the entry whose title is exactly
        ``title`` is picked. Raises InvalidTags when there is none.
        """
        self._check_endpoint(self._endpoints.wiki, Capability.wiki)
        _require(title, "title")
        text = await self._fetch(self._dialect.wiki_url(title))
        entries = self._decode(lambda: self._dialect.wiki_list(self._dialect.load(text)))
        for entry in entries:
            if self._decode(lambda: entry["title"]) == title:
                return self._decode(self._dialect.decode_wiki, entry)
        raise InvalidTags(f"No wiki page titled '{title}'")

    async def get_tag(self, name: str) -> Tag:
        """Tag named exactly ``name``. Raises InvalidTags when there is none."""
        _require(name, "name")
        text = await self._fetch(self._dialect.tag_url(name))
        tags = self._decode(lambda: [self._dialect.decode_tag(data) for data in self._dialect.tag_records(text)])
        for tag in tags:
            if tag.name == name:
                return tag
        raise InvalidTags(f"No tag named '{name}'")

    async def get_tag_by_id(self, tag_id: int) -> Tag:
        self._gate.check(Capability.tag_by_id)
        _require(tag_id, "tag_id")
        text = await self._fetch(self._dialect.tag_by_id_url(tag_id))
        tags = self._decode(lambda: [self._dialect.decode_tag(data) for data in self._dialect.tag_records(text)])
        for tag in tags:
            if tag.id == tag_id:
                return tag
        raise InvalidTags(f"No tag with id {tag_id}")

    async def get_tags(self, pattern: str) -> List[Tag]:
        """Tags whose name matches ``pattern`` (site wildcard syntax)."""
        _require(pattern, "pattern")
        text = await self._fetch(self._dialect.tags_url(pattern))
        return self._decode(lambda: [self._dialect.decode_tag(data) for data in self._dialect.tag_records(text)])

    async def autocomplete(self, query: str) -> List[AutocompleteSuggestion]:
        """Tag suggestions for a partially typed ``query``."""
        self._check_endpoint(self._endpoints.autocomplete, Capability.autocomplete)
        _require(query, "query")
        text = await self._fetch(self._dialect.autocomplete_url(query))
        return self._decode(
            lambda: [
                self._dialect.decode_autocomplete(data)
                for data in self._dialect.autocomplete_list(self._dialect.load(text))
            ]
        )

    async def check_availability(self) -> None:
        """Raises when the booru does not answer."""
        await self.transport.check(self._endpoints.image)
