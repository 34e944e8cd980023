"""
Query Synthesis
Maps a category phrase and page number to a year-scoped search string
"""
from typing import Optional
from reelscroll.core.config import settings


def year_for_page(page_number: int, anchor_year: Optional[int] = None) -> int:
    """Page 1 is the anchor year, each further page one year earlier"""
    if page_number < 1:
        raise ValueError(f"page_number must be >= 1, got {page_number}")
    anchor = settings.ANCHOR_YEAR if anchor_year is None else anchor_year
    return anchor - (page_number - 1)


def synthesize(base_phrase: str, page_number: int, anchor_year: Optional[int] = None) -> str:
    """
    Build the search string for a category page

    Args:
        base_phrase: Category base query (e.g. "action movie")
        page_number: 1-based page counter
        anchor_year: Override for the newest year (defaults to settings.ANCHOR_YEAR)

    Returns:
        "<base_phrase> <year>"
    """
    return f"{base_phrase} {year_for_page(page_number, anchor_year)}"
