"""Tests for endpoint resolution."""

import pytest

from multibooru.booru.endpoints import Endpoints, resolve_endpoints
from multibooru.booru.options import BooruOptions, UrlFormat


class TestResolveEndpoints:
    """Endpoint tables per URL format."""

    def test_danbooru(self):
        endpoints = resolve_endpoints("danbooru.donmai.us", UrlFormat.DANBOORU)
        assert endpoints == Endpoints(
            base_url="https://danbooru.donmai.us/",
            image="https://danbooru.donmai.us/posts.json",
            tag="https://danbooru.donmai.us/tags.json",
            post_count="https://danbooru.donmai.us/counts/posts.json",
            wiki="https://danbooru.donmai.us/wiki_pages.json",
            related="https://danbooru.donmai.us/related_tag.json",
            comment="https://danbooru.donmai.us/comments.json",
            autocomplete="https://danbooru.donmai.us/tags/autocomplete.json",
        )

    def test_index_php(self):
        endpoints = resolve_endpoints("safebooru.org", UrlFormat.INDEX_PHP)
        assert endpoints.image == "https://safebooru.org/index.php?page=dapi&s=post&q=index&json=1"
        assert endpoints.tag == "https://safebooru.org/index.php?page=dapi&s=tag&q=index&json=1"
        assert endpoints.comment == "https://safebooru.org/index.php?page=dapi&s=comment&q=index&json=1"
        assert endpoints.post_count == "https://safebooru.org/index.php?page=dapi&s=post&q=index&json=0"
        assert endpoints.autocomplete == "https://safebooru.org/autocomplete.php"

    def test_moebooru(self):
        endpoints = resolve_endpoints("yande.re", UrlFormat.POST_INDEX_JSON)
        assert endpoints.image == "https://yande.re/post/index.json"
        assert endpoints.post_count == "https://yande.re/post/index.xml"
        assert endpoints.related == "https://yande.re/tag/related.json"
        assert endpoints.wiki == "https://yande.re/wiki/index.json"
        assert endpoints.comment == "https://yande.re/comment/index.json"
        assert endpoints.autocomplete is None

    def test_philomena(self):
        endpoints = resolve_endpoints("derpibooru.org", UrlFormat.PHILOMENA)
        assert endpoints.image == "https://derpibooru.org/api/v1/json/search/images"
        assert endpoints.post_count == endpoints.image
        assert endpoints.tag == "https://derpibooru.org/api/v1/json/search/tags"

    def test_booru_on_rails(self):
        endpoints = resolve_endpoints("twibooru.org", UrlFormat.BOORU_ON_RAILS)
        assert endpoints.image == "https://twibooru.org/api/v3/search/posts"
        assert endpoints.comment == "https://twibooru.org/api/v3/search/comments"

    def test_sankaku(self):
        endpoints = resolve_endpoints("capi-v2.sankakucomplex.com", UrlFormat.SANKAKU)
        assert endpoints.image == "https://capi-v2.sankakucomplex.com/posts"
        assert endpoints.tag == "https://capi-v2.sankakucomplex.com/tags"
        assert endpoints.wiki == "https://capi-v2.sankakucomplex.com/wiki"
        assert endpoints.post_count is None


class TestResolveEndpointsOptions:
    """Options switch endpoints off and change the scheme."""

    def test_disabled_capabilities_leave_none(self):
        options = BooruOptions.NO_WIKI | BooruOptions.NO_RELATED | BooruOptions.NO_COMMENT
        endpoints = resolve_endpoints("danbooru.donmai.us", UrlFormat.DANBOORU, options)
        assert endpoints.wiki is None
        assert endpoints.related is None
        assert endpoints.comment is None
        assert endpoints.tag is not None

    def test_no_post_count(self):
        endpoints = resolve_endpoints("yande.re", UrlFormat.POST_INDEX_JSON, BooruOptions.NO_POST_COUNT)
        assert endpoints.post_count is None

    def test_use_http(self):
        endpoints = resolve_endpoints("example.org", UrlFormat.DANBOORU, BooruOptions.USE_HTTP)
        assert endpoints.base_url == "http://example.org/"
        assert endpoints.image.startswith("http://")

    def test_trailing_slash_in_domain(self):
        endpoints = resolve_endpoints("yande.re/", UrlFormat.POST_INDEX_JSON)
        assert endpoints.base_url == "https://yande.re/"

    @pytest.mark.parametrize("url_format", list(UrlFormat))
    def test_resolution_is_pure(self, url_format):
        options = BooruOptions.NO_WIKI | BooruOptions.LIMIT_OF_20000
        first = resolve_endpoints("booru.example", url_format, options)
        resolve_endpoints("other.example", url_format)
        second = resolve_endpoints("booru.example", url_format, options)
        assert first == second

    def test_endpoints_are_frozen(self):
        endpoints = resolve_endpoints("yande.re", UrlFormat.POST_INDEX_JSON)
        with pytest.raises(AttributeError):
            endpoints.image = "https://elsewhere/"
