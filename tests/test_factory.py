"""Tests for site presets and the client factory."""

import pytest

from multibooru.booru import Booru, BooruAuth, GelbooruDialect, UrlFormat
from multibooru.booru.factory import SITES, create_client, get_client_for_url, site_for_url


class TestCreateClient:

    def test_known_site(self, fake_transport):
        booru = create_client("danbooru", transport=fake_transport)
        assert isinstance(booru, Booru)
        assert booru.url_format is UrlFormat.DANBOORU
        assert booru.base_url == "https://danbooru.donmai.us/"
        assert booru.no_more_than_two_tags

    def test_unknown_site(self, fake_transport):
        with pytest.raises(ValueError):
            create_client("nope", transport=fake_transport)

    def test_gelbooru_uses_its_own_dialect(self, fake_transport):
        booru = create_client("gelbooru", transport=fake_transport)
        assert isinstance(booru._dialect, GelbooruDialect)

    def test_safe_sites(self, fake_transport):
        assert create_client("safebooru", transport=fake_transport).is_safe
        assert not create_client("rule34", transport=fake_transport).is_safe

    def test_presets_build(self, fake_transport):
        for name in SITES:
            booru = create_client(name, transport=fake_transport)
            assert booru.domain == SITES[name].domain

    def test_credentials_from_environment(self, fake_transport, monkeypatch):
        monkeypatch.setenv("MULTIBOORU_DANBOORU_USER_ID", "bob")
        monkeypatch.setenv("MULTIBOORU_DANBOORU_API_KEY", "secret")
        booru = create_client("danbooru", transport=fake_transport)
        assert booru.auth == BooruAuth(user_id="bob", password_hash="secret")

    def test_explicit_auth_wins(self, fake_transport, monkeypatch):
        monkeypatch.setenv("MULTIBOORU_DANBOORU_USER_ID", "bob")
        monkeypatch.setenv("MULTIBOORU_DANBOORU_API_KEY", "secret")
        auth = BooruAuth(user_id="ann", password_hash="other")
        assert create_client("danbooru", auth=auth, transport=fake_transport).auth is auth


class TestSiteForUrl:

    @pytest.mark.parametrize(
        "url, name",
        [
            ("https://danbooru.donmai.us/posts/1", "danbooru"),
            ("https://gelbooru.com/index.php?page=post&s=view&id=1", "gelbooru"),
            ("https://rule34.xxx/index.php?page=post&s=view&id=1", "rule34"),
            ("https://www.sakugabooru.com/post/show/1", "sakugabooru"),
            ("https://sakugabooru.com/post/show/1", "sakugabooru"),
            ("https://chan.sankakucomplex.com/post/show/1", "sankaku"),
            ("https://www.yande.re/post/show/1", "yandere"),
        ],
    )
    def test_known_hosts(self, url, name):
        assert site_for_url(url) == name

    def test_unknown_host(self):
        assert site_for_url("https://example.com/posts/1") is None

    def test_client_for_url(self, fake_transport):
        booru = get_client_for_url("https://derpibooru.org/images/1", transport=fake_transport)
        assert booru.url_format is UrlFormat.PHILOMENA

    def test_no_client_for_unknown_url(self, fake_transport):
        assert get_client_for_url("https://example.com/", transport=fake_transport) is None
