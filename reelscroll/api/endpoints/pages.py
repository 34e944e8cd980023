"""
Page Endpoints
Mount category pages, switch categories and drive infinite scroll
"""
from fastapi import APIRouter, HTTPException, Path
from reelscroll.catalog.categories import CATEGORY_TABLES, get_table
from reelscroll.models.media import CategoryTableResponse, PageSnapshot, VisibilityReport
from reelscroll.services.pages import CategoryPage, PageLimitError, get_page_manager
from reelscroll.services.search import get_search_client
import logging

logger = logging.getLogger(__name__)
router = APIRouter()


def _require_kind(kind: str):
    if kind not in CATEGORY_TABLES:
        raise HTTPException(status_code=404, detail=f"Unknown media kind: {kind}")


def _require_page(page_id: str) -> CategoryPage:
    page = get_page_manager().get_page(page_id)
    if page is None:
        raise HTTPException(status_code=404, detail="Page not found")
    return page


@router.get("/categories/{kind}", response_model=CategoryTableResponse)
async def list_categories(kind: str = Path(..., description="movie, tv or anime")):
    """Return the ordered category table for a media kind"""
    _require_kind(kind)
    table = get_table(kind)
    return CategoryTableResponse(kind=kind, default=table.default.id, categories=list(table))


@router.post("/pages/{kind}", response_model=PageSnapshot, status_code=201)
async def open_page(kind: str = Path(..., description="movie, tv or anime")):
    """Mount a page and load its default category"""
    _require_kind(kind)
    try:
        page = await get_page_manager().open_page(kind, get_search_client().search_media)
    except PageLimitError as e:
        logger.warning(f"Refusing to open {kind} page: {e}")
        raise HTTPException(status_code=409, detail="Too many open pages")
    return page.snapshot()


@router.get("/pages/{page_id}", response_model=PageSnapshot)
async def get_page(page_id: str = Path(..., description="Page identifier")):
    """Current items and flags of a page"""
    page = _require_page(page_id)
    page.touch()
    return page.snapshot()


@router.post("/pages/{page_id}/category/{category_id}", response_model=PageSnapshot)
async def select_category(
    page_id: str = Path(..., description="Page identifier"),
    category_id: str = Path(..., description="Category id from /categories/{kind}"),
):
    """Switch category: starts a new session from page 1"""
    page = _require_page(page_id)
    if category_id not in page.controller.categories:
        raise HTTPException(status_code=404, detail=f"Unknown category: {category_id}")
    await page.select(category_id)
    return page.snapshot()


@router.post("/pages/{page_id}/next", response_model=PageSnapshot)
async def load_next(page_id: str = Path(..., description="Page identifier")):
    """Explicitly load the next page (no-op while loading or exhausted)"""
    page = _require_page(page_id)
    await page.load_next()
    return page.snapshot()


@router.post("/pages/{page_id}/visibility", response_model=PageSnapshot)
async def report_visibility(
    report: VisibilityReport,
    page_id: str = Path(..., description="Page identifier"),
):
    """Report sentinel visibility; may start loading the next page in the background"""
    page = _require_page(page_id)
    page.report_visibility(report.ratio)
    return page.snapshot()


@router.delete("/pages/{page_id}", status_code=204)
async def close_page(page_id: str = Path(..., description="Page identifier")):
    """Unmount a page and discard its state"""
    if not get_page_manager().close_page(page_id):
        raise HTTPException(status_code=404, detail="Page not found")
