from dataclasses import dataclass
from typing import Optional

from .options import BooruOptions, Capability, UrlFormat, is_enabled


@dataclass(frozen=True)
class Endpoints:
    """Base URIs of a booru, resolved once per client."""
    base_url: str
    image: str
    tag: str
    post_count: Optional[str] = None
    wiki: Optional[str] = None
    related: Optional[str] = None
    comment: Optional[str] = None
    autocomplete: Optional[str] = None


def resource_url(base_url: str, url_format: UrlFormat, resource: str, action: str = "index") -> str:
    """Path of ``resource`` under the grammar of ``url_format``."""
    if url_format is UrlFormat.POST_INDEX_JSON:
        path = f"{resource}/{action}.json"
    elif url_format is UrlFormat.INDEX_PHP:
        path = f"index.php?page=dapi&s={resource}&q=index&json=1"
    elif url_format is UrlFormat.DANBOORU:
        path = f"{resource}.json" if resource == "related_tag" else f"{resource}s.json"
    elif url_format is UrlFormat.SANKAKU:
        path = resource if resource == "wiki" else f"{resource}s"
    elif url_format is UrlFormat.PHILOMENA:
        path = f"api/v1/json/search/{resource}s"
    elif url_format is UrlFormat.BOORU_ON_RAILS:
        path = f"api/v3/search/{resource}s"
    else:
        return base_url
    return base_url + path


def _post_count_url(base_url: str, url_format: UrlFormat, image: str) -> Optional[str]:
    if url_format is UrlFormat.INDEX_PHP:
        return image.replace("json=1", "json=0")
    if url_format is UrlFormat.POST_INDEX_JSON:
        return image.replace("index.json", "index.xml")
    if url_format in (UrlFormat.PHILOMENA, UrlFormat.BOORU_ON_RAILS):
        return image
    if url_format is UrlFormat.DANBOORU:
        return base_url + "counts/posts.json"
    return None


def _autocomplete_url(base_url: str, url_format: UrlFormat) -> Optional[str]:
    if url_format is UrlFormat.INDEX_PHP:
        return base_url + "autocomplete.php"
    if url_format is UrlFormat.DANBOORU:
        return base_url + "tags/autocomplete.json"
    return None


def resolve_endpoints(domain: str, url_format: UrlFormat, options: BooruOptions = BooruOptions.NONE) -> Endpoints:
    """
    Compute every endpoint of a booru.

    Optional endpoints are left as ``None`` when their capability is switched
    off or the grammar has no such resource.
    """
    scheme = "http" if options & BooruOptions.USE_HTTP else "https"
    base_url = f"{scheme}://{domain.strip('/')}/"

    image = resource_url(base_url, url_format, "image" if url_format is UrlFormat.PHILOMENA else "post")

    post_count = None
    if is_enabled(options, Capability.post_count):
        post_count = _post_count_url(base_url, url_format, image)

    wiki = None
    if is_enabled(options, Capability.wiki):
        wiki = resource_url(base_url, url_format, "wiki_page" if url_format is UrlFormat.DANBOORU else "wiki")

    related = None
    if is_enabled(options, Capability.related):
        if url_format is UrlFormat.DANBOORU:
            related = resource_url(base_url, url_format, "related_tag")
        else:
            related = resource_url(base_url, url_format, "tag", "related")

    comment = None
    if is_enabled(options, Capability.comment):
        comment = resource_url(base_url, url_format, "comment")

    autocomplete = None
    if is_enabled(options, Capability.autocomplete):
        autocomplete = _autocomplete_url(base_url, url_format)

    return Endpoints(
        base_url=base_url,
        image=image,
        tag=resource_url(base_url, url_format, "tag"),
        post_count=post_count,
        wiki=wiki,
        related=related,
        comment=comment,
        autocomplete=autocomplete,
    )
