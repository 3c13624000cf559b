import enum
from typing import Dict, Iterable, List

from .errors import FeatureUnavailable, TooManyTags

LIMITED_TAGS_SEARCH_COUNT = 2


class UrlFormat(enum.Enum):
    """URL grammar spoken by a booru."""
    INDEX_PHP = "index_php"
    DANBOORU = "danbooru"
    PHILOMENA = "philomena"
    BOORU_ON_RAILS = "booru_on_rails"
    POST_INDEX_JSON = "post_index_json"
    SANKAKU = "sankaku"


class BooruOptions(enum.Flag):
    """
    Per-instance options. Combine with ``|``.

    The ``NO_*`` members switch optional APIs off, the rest are structural
    quirks of the target site.
    """
    NONE = 0
    NO_RELATED = enum.auto()
    NO_WIKI = enum.auto()
    NO_COMMENT = enum.auto()
    NO_TAG_BY_ID = enum.auto()
    NO_LAST_COMMENTS = enum.auto()
    NO_POST_BY_MD5 = enum.auto()
    NO_POST_BY_ID = enum.auto()
    NO_POST_COUNT = enum.auto()
    NO_MULTIPLE_RANDOM = enum.auto()
    NO_FAVORITE = enum.auto()
    NO_AUTOCOMPLETE = enum.auto()
    USE_HTTP = enum.auto()
    TAG_API_XML = enum.auto()
    COMMENT_API_XML = enum.auto()
    LIMIT_OF_20000 = enum.auto()
    NO_EMPTY_POST_SEARCH = enum.auto()
    NO_MORE_THAN_2_TAGS = enum.auto()


class Capability(str, enum.Enum):
    related = "related"
    wiki = "wiki"
    comment = "comment"
    tag_by_id = "tag_by_id"
    last_comments = "last_comments"
    post_by_md5 = "post_by_md5"
    post_by_id = "post_by_id"
    post_count = "post_count"
    multiple_random = "multiple_random"
    favorite = "favorite"
    autocomplete = "autocomplete"


_DISABLING_OPTION: Dict[Capability, BooruOptions] = {
    Capability.related: BooruOptions.NO_RELATED,
    Capability.wiki: BooruOptions.NO_WIKI,
    Capability.comment: BooruOptions.NO_COMMENT,
    Capability.tag_by_id: BooruOptions.NO_TAG_BY_ID,
    Capability.last_comments: BooruOptions.NO_LAST_COMMENTS,
    Capability.post_by_md5: BooruOptions.NO_POST_BY_MD5,
    Capability.post_by_id: BooruOptions.NO_POST_BY_ID,
    Capability.post_count: BooruOptions.NO_POST_COUNT,
    Capability.multiple_random: BooruOptions.NO_MULTIPLE_RANDOM,
    Capability.favorite: BooruOptions.NO_FAVORITE,
    Capability.autocomplete: BooruOptions.NO_AUTOCOMPLETE,
}


def is_enabled(options: BooruOptions, capability: Capability) -> bool:
    if options & _DISABLING_OPTION[capability]:
        return False
    # Last comments are served by the comment API.
    if capability is Capability.last_comments:
        return is_enabled(options, Capability.comment)
    return True


def clean_tags(tags: Iterable[str]) -> List[str]:
    """Drop ``None`` and blank entries."""
    if tags is None:
        return []
    return [tag for tag in tags if tag is not None and tag.strip()]


class CapabilityGate:
    """Checks an operation against the options before any request is made."""

    def __init__(self, options: BooruOptions):
        self.options = options

    def is_enabled(self, capability: Capability) -> bool:
        return is_enabled(self.options, capability)

    def check(self, capability: Capability) -> None:
        if not self.is_enabled(capability):
            raise FeatureUnavailable(capability.value)

    def check_tags(self, tags: Iterable[str]) -> List[str]:
        """Return the non-blank tags, or raise TooManyTags on a two-tag site."""
        tags = clean_tags(tags)
        if self.options & BooruOptions.NO_MORE_THAN_2_TAGS and len(tags) > LIMITED_TAGS_SEARCH_COUNT:
            raise TooManyTags(f"This booru accepts at most {LIMITED_TAGS_SEARCH_COUNT} tags, got {len(tags)}")
        return tags
