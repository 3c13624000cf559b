"""Shared fixtures: a recording transport so no test touches the network."""

from typing import Dict, List, Optional

import pytest

from multibooru.booru import Booru, BooruOptions, UrlFormat


class FakeTransport:
    """Answers requests from a queue of canned bodies and records every URL."""

    def __init__(self, responses=None, redirect_to: Optional[str] = None):
        self.responses = list(responses or [])
        self.redirect_to = redirect_to
        self.requests: List[str] = []
        self.headers: List[Optional[Dict[str, str]]] = []
        self.closed = False

    async def fetch(self, url, headers=None):
        self.requests.append(url)
        self.headers.append(headers)
        if not self.responses:
            raise AssertionError(f"Unexpected request to {url}")
        return self.responses.pop(0)

    async def fetch_redirect_url(self, url, headers=None):
        self.requests.append(url)
        self.headers.append(headers)
        return self.redirect_to

    async def check(self, url):
        self.requests.append(url)

    async def aclose(self):
        self.closed = True


@pytest.fixture
def fake_transport():
    return FakeTransport()


@pytest.fixture
def make_booru():
    """Build a Booru wired to a FakeTransport answering ``responses`` in order."""

    def _make(domain, url_format: UrlFormat, options=BooruOptions.NONE, responses=None, **kwargs):
        transport = FakeTransport(responses, redirect_to=kwargs.pop("redirect_to", None))
        booru = Booru(domain, url_format, options, transport=transport, **kwargs)
        return booru, transport

    return _make
