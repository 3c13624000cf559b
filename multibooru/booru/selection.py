"""
Random-post selection plans.

Most boorus pick a random post server side, so a single request is enough
(``DirectRandom``). Classic ``index.php`` boorus without native random
sorting need two stages: either follow the site's "random post" redirect and
read the chosen id (``RedirectRandom``), or count the matching posts and
request one at a random offset (``OffsetRandom``). The client runs the first
stage, hands the intermediate result to the plan, then fetches the final URI.
"""
import random
from dataclasses import dataclass
from typing import Callable, Optional, Union
from urllib.parse import parse_qs, urlsplit

from .errors import DecodeError, InvalidTags


@dataclass(frozen=True)
class DirectRandom:
    url: str


@dataclass(frozen=True)
class RedirectRandom:
    redirect_url: str
    build_final_url: Callable[[int], str]

    def post_id_from(self, final_url: str) -> int:
        """Read the post id the redirect landed on."""
        ids = parse_qs(urlsplit(final_url).query).get("id")
        if not ids:
            raise DecodeError(f"Random redirect did not land on a post: {final_url}")
        try:
            return int(ids[0])
        except ValueError as e:
            raise DecodeError(f"Random redirect returned an invalid id: {ids[0]}") from e


@dataclass(frozen=True)
class OffsetRandom:
    count_url: str
    build_final_url: Callable[[int], str]
    max_offset: Optional[int] = None

    def pick_offset(self, count: int, rng: random.Random) -> int:
        """Uniform offset in ``[0, count)``, clamped to ``max_offset``."""
        if count <= 0:
            raise InvalidTags("No post matches these tags")
        if self.max_offset is not None and count > self.max_offset:
            count = self.max_offset
        return rng.randrange(count)


RandomPlan = Union[DirectRandom, RedirectRandom, OffsetRandom]
