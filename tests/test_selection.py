"""Tests for the two-stage random selection plans."""

from unittest.mock import MagicMock

import pytest

from multibooru.booru.errors import DecodeError, InvalidTags
from multibooru.booru.selection import OffsetRandom, RedirectRandom


class TestRedirectRandom:

    def _plan(self):
        return RedirectRandom(
            redirect_url="https://safebooru.org/index.php?page=post&s=random&tags=",
            build_final_url=lambda post_id: f"https://safebooru.org/post/{post_id}",
        )

    def test_reads_post_id(self):
        plan = self._plan()
        assert plan.post_id_from("https://safebooru.org/index.php?page=post&s=view&id=1234") == 1234

    def test_final_url(self):
        assert self._plan().build_final_url(7) == "https://safebooru.org/post/7"

    def test_missing_id(self):
        with pytest.raises(DecodeError):
            self._plan().post_id_from("https://safebooru.org/index.php?page=post&s=list")

    def test_invalid_id(self):
        with pytest.raises(DecodeError):
            self._plan().post_id_from("https://safebooru.org/index.php?page=post&s=view&id=abc")


class TestOffsetRandom:

    def _plan(self, max_offset=None):
        return OffsetRandom(
            count_url="https://safebooru.org/count",
            build_final_url=lambda offset: f"https://safebooru.org/post?pid={offset}",
            max_offset=max_offset,
        )

    def test_picks_within_count(self):
        rng = MagicMock()
        rng.randrange.return_value = 4
        assert self._plan().pick_offset(10, rng) == 4
        rng.randrange.assert_called_once_with(10)

    def test_clamps_to_max_offset(self):
        rng = MagicMock()
        rng.randrange.return_value = 0
        self._plan(max_offset=20001).pick_offset(50000, rng)
        rng.randrange.assert_called_once_with(20001)

    def test_below_max_offset_not_clamped(self):
        rng = MagicMock()
        rng.randrange.return_value = 0
        self._plan(max_offset=20001).pick_offset(12, rng)
        rng.randrange.assert_called_once_with(12)

    def test_zero_count(self):
        rng = MagicMock()
        with pytest.raises(InvalidTags):
            self._plan().pick_offset(0, rng)
        rng.randrange.assert_not_called()
