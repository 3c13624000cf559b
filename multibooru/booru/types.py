from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class Rating(str, Enum):
    general = "general"
    safe = "safe"
    questionable = "questionable"
    explicit = "explicit"


RATING_LETTERS = {
    "g": Rating.general,
    "s": Rating.safe,
    "q": Rating.questionable,
    "e": Rating.explicit,
}


def get_rating(letter: str) -> Rating:
    """Map a rating letter (any case) to a Rating. Raises ValueError otherwise."""
    if not isinstance(letter, str) or len(letter) != 1:
        raise ValueError(f"Invalid rating '{letter}'.")
    rating = RATING_LETTERS.get(letter.lower())
    if rating is None:
        raise ValueError(f"Invalid rating '{letter}'.")
    return rating


class TagCategory(str, Enum):
    general = "general"
    artist = "artist"
    copyright = "copyright"
    character = "character"
    meta = "meta"
    species = "species"
    deprecated = "deprecated"


# Numeric categories shared by Danbooru, Gelbooru and Moebooru.
TAG_CATEGORY_IDS = {
    0: TagCategory.general,
    1: TagCategory.artist,
    3: TagCategory.copyright,
    4: TagCategory.character,
    5: TagCategory.meta,
    6: TagCategory.deprecated,
}


def get_tag_category(value) -> TagCategory:
    return TAG_CATEGORY_IDS.get(int(value), TagCategory.general)


@dataclass
class BooruAuth:
    """Credentials for APIs that take them in the query string."""
    user_id: str
    password_hash: str


class BooruRecord(BaseModel):
    model_config = ConfigDict(frozen=True)


class Post(BooruRecord):
    """A post from any booru."""
    id: int
    post_url: str
    file_url: Optional[str] = None
    preview_url: Optional[str] = None
    sample_url: Optional[str] = None
    rating: Rating
    tags: List[str]
    hash: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    created_at: Optional[datetime] = None
    source: Optional[str] = None
    score: Optional[int] = None
    parent_id: Optional[int] = None


class Comment(BooruRecord):
    comment_id: int
    post_id: int
    author_id: Optional[int] = None
    author_name: Optional[str] = None
    body: str
    created_at: datetime


class Tag(BooruRecord):
    id: int
    name: str
    category: TagCategory
    count: int


class WikiEntry(BooruRecord):
    id: int
    title: str
    body: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class RelatedTag(BooruRecord):
    name: str
    count: Optional[int] = None
    category: Optional[TagCategory] = None


class AutocompleteSuggestion(BooruRecord):
    name: str
    label: str
    count: Optional[int] = None
    category: Optional[TagCategory] = None
