"""
Category Tables
Static, ordered category lists for each media kind
"""
import logging
from typing import Dict, Iterator, List
from reelscroll.models.media import Category, MediaKind

logger = logging.getLogger(__name__)


class CategoryTable:
    """Ordered, immutable set of categories with one default entry"""

    def __init__(self, kind: MediaKind, categories: List[Category], default_id: str = "popular"):
        if not categories:
            raise ValueError(f"Category table for {kind} is empty")
        self.kind = kind
        self._categories = tuple(categories)
        self._by_id: Dict[str, Category] = {c.id: c for c in self._categories}
        if len(self._by_id) != len(self._categories):
            raise ValueError(f"Duplicate category ids in {kind} table")
        if default_id not in self._by_id:
            raise ValueError(f"Default category {default_id!r} missing from {kind} table")
        self.default = self._by_id[default_id]

    def __iter__(self) -> Iterator[Category]:
        return iter(self._categories)

    def __len__(self) -> int:
        return len(self._categories)

    def __contains__(self, category_id: object) -> bool:
        return category_id in self._by_id

    def resolve(self, category_id: str) -> Category:
        """Look up a category, falling back to the default entry"""
        category = self._by_id.get(category_id)
        if category is None:
            logger.warning(
                f"Unknown {self.kind} category {category_id!r}, using {self.default.id!r}"
            )
            return self.default
        return category


def _table(kind: MediaKind, entries: List[tuple]) -> CategoryTable:
    return CategoryTable(kind, [Category(id=id_, label=label, query=query) for id_, label, query in entries])


MOVIE_CATEGORIES = _table("movie", [
    ("popular", "Most popular", "movie"),
    ("rating", "Most rating", "top rated movie"),
    ("recent", "Most recent", "movie"),
    ("action", "Action", "action movie"),
    ("adventure", "Adventure", "adventure movie"),
    ("animation", "Animation", "animation movie"),
    ("comedy", "Comedy", "comedy movie"),
    ("crime", "Crime", "crime movie"),
    ("documentary", "Documentary", "documentary"),
    ("drama", "Drama", "drama movie"),
    ("family", "Family", "family movie"),
    ("fantasy", "Fantasy", "fantasy movie"),
    ("history", "History", "history movie"),
    ("horror", "Horror", "horror movie"),
    ("music", "Music", "music movie"),
    ("mystery", "Mystery", "mystery movie"),
])

TV_CATEGORIES = _table("tv", [
    ("popular", "Popular Series", "series"),
    ("action", "Action", "action series"),
    ("comedy", "Comedy", "comedy series"),
    ("crime", "Crime", "crime series"),
    ("drama", "Drama", "drama series"),
    ("family", "Family", "family series"),
    ("fantasy", "Fantasy", "fantasy series"),
    ("horror", "Horror", "horror series"),
    ("mystery", "Mystery", "mystery series"),
    ("sci-fi", "Sci-Fi", "sci-fi series"),
    ("thriller", "Thriller", "thriller series"),
    ("documentary", "Documentary", "documentary series"),
])

ANIME_CATEGORIES = _table("anime", [
    ("popular", "Popular Anime", "anime"),
    ("shonen", "Shonen", "shonen anime"),
    ("seinen", "Seinen", "seinen anime"),
    ("isekai", "Isekai", "isekai anime"),
    ("action", "Action", "action anime"),
    ("romance", "Romance", "romance anime"),
    ("fantasy", "Fantasy", "fantasy anime"),
    ("slice_of_life", "Slice of Life", "slice of life anime"),
    ("drama", "Drama", "drama anime"),
    ("sci-fi", "Sci-Fi", "sci-fi anime"),
    ("horror", "Horror", "horror anime"),
    ("movie", "Movies", "anime movie"),
])

CATEGORY_TABLES: Dict[str, CategoryTable] = {
    "movie": MOVIE_CATEGORIES,
    "tv": TV_CATEGORIES,
    "anime": ANIME_CATEGORIES,
}


def get_table(kind: str) -> CategoryTable:
    """Return the category table for a media kind (KeyError if unknown)"""
    return CATEGORY_TABLES[kind]
