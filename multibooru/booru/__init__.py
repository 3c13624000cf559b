from .base import BooruDialect
from .booru_on_rails import BooruOnRailsDialect
from .client import Booru
from .danbooru import DanbooruDialect
from .endpoints import Endpoints, resolve_endpoints
from .errors import (
    AuthenticationRequired,
    BooruError,
    DecodeError,
    FeatureUnavailable,
    HttpError,
    InvalidTags,
    PostNotFound,
    TooManyTags,
)
from .factory import SITES, create_client, get_client_for_url, site_for_url
from .gelbooru import GelbooruDialect, IndexPhpDialect
from .moebooru import PostIndexJsonDialect
from .options import BooruOptions, Capability, UrlFormat
from .philomena import PhilomenaDialect
from .sankaku import SankakuDialect
from .transport import HttpTransport
from .types import (
    AutocompleteSuggestion,
    BooruAuth,
    Comment,
    Post,
    Rating,
    RelatedTag,
    Tag,
    TagCategory,
    WikiEntry,
)

__all__ = [
    "Booru",
    "BooruAuth",
    "BooruOptions",
    "Capability",
    "UrlFormat",
    "Endpoints",
    "resolve_endpoints",
    "HttpTransport",
    "BooruDialect",
    "IndexPhpDialect",
    "GelbooruDialect",
    "DanbooruDialect",
    "PhilomenaDialect",
    "BooruOnRailsDialect",
    "PostIndexJsonDialect",
    "SankakuDialect",
    "Post",
    "Comment",
    "Tag",
    "TagCategory",
    "WikiEntry",
    "RelatedTag",
    "AutocompleteSuggestion",
    "Rating",
    "BooruError",
    "FeatureUnavailable",
    "TooManyTags",
    "InvalidTags",
    "PostNotFound",
    "AuthenticationRequired",
    "HttpError",
    "DecodeError",
    "SITES",
    "create_client",
    "get_client_for_url",
    "site_for_url",
]
