"""
Media Models
Pydantic models for catalog items, categories and page snapshots
"""
import re
from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Any, Dict, List, Literal, Optional
from reelscroll.utils.helpers import sanitize_title

MediaKind = Literal["movie", "tv", "anime"]

_KIND_ALIASES = {"series": "tv", "show": "tv"}
_YEAR_RE = re.compile(r"\d{4}")


def _parse_year(value: Any) -> Optional[int]:
    # accepts 2024, "2024-05-01" and ranges such as "2019-2023"
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    match = _YEAR_RE.match(str(value or "").strip())
    return int(match.group()) if match else None


def _parse_rating(value: Any) -> Optional[float]:
    if value in (None, ""):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _parse_cast(value: Any) -> Optional[str]:
    if isinstance(value, (list, tuple)):
        return ", ".join(str(name) for name in value) or None
    return str(value) if value else None


def _poster_url(poster_path: Optional[str]) -> Optional[str]:
    return f"https://image.tmdb.org/t/p/w500{poster_path}" if poster_path else None


class MediaItem(BaseModel):
    """Single title returned by the remote search"""
    imdb_id: Optional[str] = None
    tmdb_id: Optional[str] = None
    title: str = ""
    type: Optional[MediaKind] = None
    year: Optional[int] = None
    rating: Optional[float] = None
    image: Optional[str] = None
    thumbnail_url: Optional[str] = None
    description: Optional[str] = None
    cast: Optional[str] = None

    @model_validator(mode="after")
    def validate_identity(self):
        if not self.imdb_id and not self.tmdb_id:
            raise ValueError("MediaItem needs an imdb_id or a tmdb_id")
        return self

    @property
    def identity_key(self) -> str:
        """Key used for deduplication: IMDB id, else the TMDB id"""
        if self.imdb_id:
            return self.imdb_id
        return f"tmdb:{self.tmdb_id}"

    @classmethod
    def from_remote(cls, data: Dict[str, Any]) -> "MediaItem":
        """
        Build an item from a raw search result

        Accepts the field spellings the search backend is known to emit
        (TMDB-style ``name``/``release_date``/``poster_path`` as well as the
        flat ``title``/``year``/``image`` shape).
        """
        tmdb_id = data.get("tmdb_id") or data.get("id")
        imdb_id = data.get("imdb_id") or (data.get("external_ids") or {}).get("imdb_id")

        year = data.get("year") or data.get("release_date") or data.get("first_air_date")

        kind = data.get("type") or data.get("media_type")
        kind = _KIND_ALIASES.get(kind, kind)

        rating = data.get("rating")
        if rating is None:
            rating = data.get("vote_average")

        return cls(
            imdb_id=imdb_id or None,
            tmdb_id=str(tmdb_id) if tmdb_id else None,
            title=sanitize_title(data.get("title") or data.get("name") or ""),
            type=kind if kind in ("movie", "tv", "anime") else None,
            year=_parse_year(year),
            rating=_parse_rating(rating),
            image=data.get("image") or data.get("poster") or _poster_url(data.get("poster_path")),
            thumbnail_url=data.get("thumbnail_url"),
            description=data.get("description") or data.get("overview"),
            cast=_parse_cast(data.get("cast") or data.get("actors")),
        )


class Category(BaseModel):
    """Named filter mapped to a base search phrase"""
    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    query: str


class CategoryTableResponse(BaseModel):
    """Category listing for a media kind"""
    kind: MediaKind
    default: str
    categories: List[Category]


class PageSnapshot(BaseModel):
    """Observable state of a category page"""
    page_id: Optional[str] = None
    kind: MediaKind
    category: Category
    page: int
    items: List[MediaItem] = Field(default_factory=list)
    is_loading: bool
    has_more: bool


class VisibilityReport(BaseModel):
    """Sentinel visibility reported by the client"""
    ratio: float = Field(..., ge=0.0, le=1.0, description="Visible fraction of the sentinel")


class HomeFeed(BaseModel):
    """Landing page content: hero item and horizontal rails"""
    featured: Optional[MediaItem] = None
    rows: Dict[str, List[MediaItem]] = Field(default_factory=dict)
