"""
Job crawl endpoints: board search, single job URL fetch and manual entry.
"""
import logging
from typing import Optional
from pydantic import BaseModel
from fastapi import APIRouter, HTTPException, Depends, Request
from fastapi.responses import JSONResponse

from app.rate_limit import limiter, RATE_LIMIT_CRAWL, RATE_LIMIT_MANUAL
from core.errors import MalformedInput
from core.normalize import build_manual_job
from crawler.job_crawler import JobCrawler, validate_job_url
from crawler.plugins import resolve_board

logger = logging.getLogger(__name__)
router = APIRouter()

DEFAULT_BOARD = "awign"

_crawler: Optional[JobCrawler] = None


class CrawlRequest(BaseModel):
    jobRole: Optional[str] = None
    jobBoard: str = DEFAULT_BOARD
    location: str = ""


class FetchJobRequest(BaseModel):
    jobUrl: Optional[str] = None


class ManualJobRequest(BaseModel):
    title: Optional[str] = None
    description: str
    company: Optional[str] = None
    location: Optional[str] = None
    url: str = ""


def get_crawler() -> JobCrawler:
    """Shared crawler; each call still launches its own browser."""
    global _crawler
    if _crawler is None:
        _crawler = JobCrawler()
    return _crawler


def _board_or_default(board: Optional[str]) -> str:
    try:
        return resolve_board(board)
    except MalformedInput:
        logger.info(f"[api/crawl] Unknown board {board!r}, using {DEFAULT_BOARD}")
        return DEFAULT_BOARD


@router.post("/api/crawl")
@limiter.limit(RATE_LIMIT_CRAWL)
async def crawl_jobs(request: Request, body: CrawlRequest, crawler: JobCrawler = Depends(get_crawler)):
    """
    Search a job board for a role.

    Returns jobs with an optional warning. A crawl that produced no jobs
    returns 500 with the failure reason.
    """
    job_role = (body.jobRole or "").strip()
    if not job_role:
        raise HTTPException(status_code=400, detail="Job role is required")

    board = _board_or_default(body.jobBoard)
    logger.info(f"[api/crawl] Crawling {board} for: {job_role}")

    result = await crawler.search(job_role, board, body.location)
    jobs = [job.model_dump(mode="json") for job in result.jobs]

    if result.error and not jobs:
        return JSONResponse(
            status_code=500,
            content={"error": result.error, "jobs": [], "blocked": result.blocked},
        )

    return {"jobs": jobs, "warning": result.error}


@router.post("/api/fetch-job")
@limiter.limit(RATE_LIMIT_CRAWL)
async def fetch_job(request: Request, body: FetchJobRequest, crawler: JobCrawler = Depends(get_crawler)):
    """
    Fetch one job page by URL.

    Any failure after URL validation tells the client to fall back to
    manual paste (403 when the page was blocked or unreadable).
    """
    if not (body.jobUrl or "").strip():
        raise HTTPException(status_code=400, detail="Job URL is required")

    try:
        validate_job_url(body.jobUrl)
    except MalformedInput as e:
        return JSONResponse(status_code=400, content={"error": str(e), "blocked": False})

    result = await crawler.fetch_single(body.jobUrl)

    if not result.success:
        return JSONResponse(
            status_code=403 if result.blocked else 500,
            content={
                "error": result.error,
                "blocked": result.blocked,
                "reason": result.reason.value if result.reason else None,
                "canManualPaste": True,
            },
        )

    return {"success": True, "job": result.job.model_dump(mode="json")}


@router.post("/api/manual-job")
@limiter.limit(RATE_LIMIT_MANUAL)
async def manual_job(request: Request, body: ManualJobRequest):
    """Create a job record from a pasted description."""
    try:
        job = build_manual_job(
            title=body.title,
            description=body.description,
            company=body.company,
            location=body.location,
            url=body.url,
        )
    except MalformedInput as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info(f"[api/manual-job] Created manual job: {job.title[:60]}")
    return {"success": True, "job": job.model_dump(mode="json")}
