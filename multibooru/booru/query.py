import logging
from typing import Dict, Sequence, Tuple
from urllib.parse import quote, urlsplit, urlunsplit

from .options import UrlFormat

logger = logging.getLogger(__name__)

# Hosts whose API expects a non-standard argument delimiter.
ARGUMENT_DELIMITERS: Dict[str, str] = {
    "danbooru.donmai.us": "$",
}

# Hosts whose reverse proxy wants random sorting as a tag token.
URI_REWRITES: Dict[str, Tuple[str, str]] = {
    "gelbooru.com": ("&sort=random", "+sort:random"),
}

_SEARCH_FORMATS = (UrlFormat.PHILOMENA, UrlFormat.BOORU_ON_RAILS)


class QueryBuilder:
    """Builds request URIs in the grammar of one URL format."""

    def __init__(self, url_format: UrlFormat):
        self.url_format = url_format

    @property
    def uses_search_query(self) -> bool:
        """Philomena and Booru-on-Rails take ``q=`` instead of ``tags=``."""
        return self.url_format in _SEARCH_FORMATS

    def tags_to_string(self, tags: Sequence[str]) -> str:
        if not tags:
            # These APIs refuse an empty query, so ask for every post instead.
            return "q=id.gte:0" if self.uses_search_query else "tags="

        key = "q=" if self.uses_search_query else "tags="
        separator = "," if self.uses_search_query else "+"
        return key + separator.join(quote(tag, safe="") for tag in tags).lower()

    def limit(self, quantity: int) -> str:
        return ("per_page=" if self.uses_search_query else "limit=") + str(quantity)

    def search_arg(self, name: str) -> str:
        if self.url_format is UrlFormat.DANBOORU:
            return f"search[{name}]="
        return f"{name}="

    def create_url(self, url: str, *args: str) -> str:
        """Append ``args`` to the query string of ``url``."""
        parts = urlsplit(url)
        host = parts.hostname or ""
        delimiter = ARGUMENT_DELIMITERS.get(host, "&")

        query = delimiter.join(args)
        if parts.query:
            query = f"{parts.query}{delimiter}{query}" if query else parts.query
        uri = urlunsplit(parts._replace(query=query))

        for rewrite_host, (old, new) in URI_REWRITES.items():
            if rewrite_host in host:
                uri = uri.replace(old, new)

        logger.debug(f"Built request URI {uri}")
        return uri
