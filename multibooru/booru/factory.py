import random
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple, Type
from urllib.parse import urlparse

from ..config import settings
from .base import BooruDialect
from .client import Booru
from .gelbooru import GelbooruDialect
from .options import BooruOptions as Opt
from .options import UrlFormat
from .transport import HttpTransport
from .types import BooruAuth

_INDEX_PHP_DEFAULTS = Opt.NO_RELATED | Opt.NO_WIKI | Opt.NO_POST_BY_MD5 | Opt.COMMENT_API_XML | Opt.TAG_API_XML
_MOEBOORU_DEFAULTS = Opt.NO_POST_BY_MD5 | Opt.NO_TAG_BY_ID | Opt.NO_AUTOCOMPLETE
_PHILOMENA_DEFAULTS = (
    Opt.NO_RELATED | Opt.NO_WIKI | Opt.NO_POST_BY_MD5 | Opt.NO_TAG_BY_ID
    | Opt.NO_LAST_COMMENTS | Opt.NO_FAVORITE | Opt.NO_AUTOCOMPLETE
)


@dataclass(frozen=True)
class SiteConfig:
    """A known booru and how to talk to it."""
    domain: str
    url_format: UrlFormat
    options: Opt = Opt.NONE
    dialect_class: Optional[Type[BooruDialect]] = None
    is_safe: bool = False
    aliases: Tuple[str, ...] = field(default_factory=tuple)


SITES: Dict[str, SiteConfig] = {
    "danbooru": SiteConfig("danbooru.donmai.us", UrlFormat.DANBOORU, Opt.NO_MORE_THAN_2_TAGS),
    "atfbooru": SiteConfig("booru.allthefallen.moe", UrlFormat.DANBOORU, Opt.NO_FAVORITE),
    "gelbooru": SiteConfig(
        "gelbooru.com",
        UrlFormat.INDEX_PHP,
        Opt.NO_RELATED | Opt.NO_WIKI | Opt.NO_LAST_COMMENTS | Opt.COMMENT_API_XML | Opt.LIMIT_OF_20000,
        dialect_class=GelbooruDialect,
    ),
    "safebooru": SiteConfig("safebooru.org", UrlFormat.INDEX_PHP, _INDEX_PHP_DEFAULTS, is_safe=True),
    "rule34": SiteConfig("api.rule34.xxx", UrlFormat.INDEX_PHP, _INDEX_PHP_DEFAULTS, aliases=("rule34.xxx",)),
    "xbooru": SiteConfig("xbooru.com", UrlFormat.INDEX_PHP, _INDEX_PHP_DEFAULTS),
    "realbooru": SiteConfig("realbooru.com", UrlFormat.INDEX_PHP, _INDEX_PHP_DEFAULTS | Opt.NO_AUTOCOMPLETE),
    "yandere": SiteConfig("yande.re", UrlFormat.POST_INDEX_JSON, _MOEBOORU_DEFAULTS),
    "konachan": SiteConfig("konachan.com", UrlFormat.POST_INDEX_JSON, _MOEBOORU_DEFAULTS),
    "lolibooru": SiteConfig("lolibooru.moe", UrlFormat.POST_INDEX_JSON, _MOEBOORU_DEFAULTS),
    "sakugabooru": SiteConfig("www.sakugabooru.com", UrlFormat.POST_INDEX_JSON, _MOEBOORU_DEFAULTS, is_safe=True),
    "derpibooru": SiteConfig("derpibooru.org", UrlFormat.PHILOMENA, _PHILOMENA_DEFAULTS),
    "ponybooru": SiteConfig("ponybooru.org", UrlFormat.PHILOMENA, _PHILOMENA_DEFAULTS),
    "twibooru": SiteConfig("twibooru.org", UrlFormat.BOORU_ON_RAILS, _PHILOMENA_DEFAULTS),
    "sankaku": SiteConfig(
        "capi-v2.sankakucomplex.com",
        UrlFormat.SANKAKU,
        Opt.NO_RELATED | Opt.NO_POST_BY_MD5 | Opt.NO_POST_COUNT
        | Opt.NO_LAST_COMMENTS | Opt.NO_FAVORITE | Opt.NO_TAG_BY_ID,
        aliases=("chan.sankakucomplex.com", "sankakucomplex.com"),
    ),
}


def create_client(
    name: str,
    auth: Optional[BooruAuth] = None,
    transport: Optional[HttpTransport] = None,
    rng: Optional[random.Random] = None,
) -> Booru:
    """
    Build a client for a known site.

    Credentials come from ``auth`` or, failing that, from the settings.
    """
    try:
        site = SITES[name]
    except KeyError:
        raise ValueError(f"Unknown booru '{name}', expected one of: {', '.join(sorted(SITES))}") from None

    if auth is None:
        credentials = settings.get_credentials(name)
        if credentials:
            auth = BooruAuth(user_id=credentials[0], password_hash=credentials[1])

    return Booru(
        site.domain,
        site.url_format,
        site.options,
        auth=auth,
        transport=transport,
        rng=rng,
        dialect_class=site.dialect_class,
        is_safe=site.is_safe,
    )


def site_for_url(url: str) -> Optional[str]:
    """Name of the known site hosting ``url``."""
    host = (urlparse(url).hostname or "").lower()
    for name, site in SITES.items():
        domains = (site.domain,) + site.aliases
        for domain in domains:
            if host == domain or host == f"www.{domain}" or f"www.{host}" == domain:
                return name
    return None


def get_client_for_url(url: str, transport: Optional[HttpTransport] = None) -> Optional[Booru]:
    """
    Find the right client for a given URL by its host.
    """
    name = site_for_url(url)
    if name is None:
        return None
    return create_client(name, transport=transport)
