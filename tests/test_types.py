"""Tests for canonical records and their helpers."""

import pytest
from pydantic import ValidationError

from multibooru.booru.types import Post, Rating, TagCategory, get_rating, get_tag_category


class TestGetRating:

    @pytest.mark.parametrize(
        "letter, rating",
        [
            ("g", Rating.general),
            ("s", Rating.safe),
            ("q", Rating.questionable),
            ("e", Rating.explicit),
            ("G", Rating.general),
            ("S", Rating.safe),
            ("Q", Rating.questionable),
            ("E", Rating.explicit),
        ],
    )
    def test_known_letters(self, letter, rating):
        assert get_rating(letter) is rating

    @pytest.mark.parametrize("letter", ["x", "", "sq", "1", None])
    def test_anything_else_is_invalid(self, letter):
        with pytest.raises(ValueError):
            get_rating(letter)


class TestGetTagCategory:

    def test_known_ids(self):
        assert get_tag_category(1) is TagCategory.artist
        assert get_tag_category("4") is TagCategory.character

    def test_unknown_id_is_general(self):
        assert get_tag_category(42) is TagCategory.general


class TestPost:

    def test_is_frozen(self):
        post = Post(id=1, post_url="https://x/1", rating=Rating.safe, tags=["a"])
        with pytest.raises(ValidationError):
            post.id = 2

    def test_dumps_to_json(self):
        post = Post(id=1, post_url="https://x/1", rating=Rating.safe, tags=["a"])
        dumped = post.model_dump(mode="json")
        assert dumped["rating"] == "safe"
        assert dumped["tags"] == ["a"]
