"""
Testimonial endpoints, including the live SSE feed.

Every write signals the feed so connected home pages refresh their
testimonial carousel.
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status
from fastapi.responses import StreamingResponse
from pymongo.database import Database

from aroma.auth import require_admin
from aroma.core.config import get_settings
from aroma.database import get_db
from aroma.repositories.testimonials import TestimonialRepository
from aroma.schemas import (
    ActiveTestimonial,
    ActiveTestimonialsResponse,
    TestimonialCreate,
    TestimonialListResponse,
    TestimonialOut,
    TestimonialUpdate,
)
from aroma.services.testimonial_feed import (
    TestimonialFeed,
    event_stream,
    get_testimonial_feed,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/testimonials", tags=["Testimonials"])


@router.get("", response_model=TestimonialListResponse)
def list_testimonials(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
    search: Optional[str] = Query(None),
    db: Database = Depends(get_db),
) -> dict[str, Any]:
    return TestimonialRepository(db).paginate(page=page, limit=limit, search=search)


@router.post(
    "",
    response_model=TestimonialOut,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_testimonial(
    payload: TestimonialCreate,
    db: Database = Depends(get_db),
    feed: TestimonialFeed = Depends(get_testimonial_feed),
) -> dict[str, Any]:
    testimonial = TestimonialRepository(db).create(payload)
    feed.publish()
    return testimonial


@router.get("/active", response_model=ActiveTestimonialsResponse)
def list_active_testimonials(db: Database = Depends(get_db)) -> dict[str, Any]:
    return {"testimonials": TestimonialRepository(db).list_active()}


@router.get("/events", summary="Live Testimonial Feed (SSE)")
async def testimonial_events(
    request: Request,
    db: Database = Depends(get_db),
    feed: TestimonialFeed = Depends(get_testimonial_feed),
) -> StreamingResponse:
    """
    Server-Sent Events stream. Each event's data is a JSON array of the
    newest active testimonials.
    """
    repo = TestimonialRepository(db)
    size = get_settings().testimonial_feed_size

    def snapshot() -> list[dict[str, Any]]:
        return [
            ActiveTestimonial(**doc).model_dump(by_alias=True)
            for doc in repo.list_active(limit=size)
        ]

    return StreamingResponse(
        event_stream(feed, snapshot, request.is_disconnected),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "Connection": "keep-alive"},
    )


@router.get("/{testimonial_id}", response_model=TestimonialOut)
def get_testimonial(testimonial_id: str, db: Database = Depends(get_db)) -> dict[str, Any]:
    return TestimonialRepository(db).get(testimonial_id)


@router.patch(
    "/{testimonial_id}",
    response_model=TestimonialOut,
    dependencies=[Depends(require_admin)],
)
def update_testimonial(
    testimonial_id: str,
    payload: TestimonialUpdate,
    db: Database = Depends(get_db),
    feed: TestimonialFeed = Depends(get_testimonial_feed),
) -> dict[str, Any]:
    testimonial = TestimonialRepository(db).update(testimonial_id, payload)
    feed.publish()
    return testimonial


@router.delete(
    "/{testimonial_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
def delete_testimonial(
    testimonial_id: str,
    db: Database = Depends(get_db),
    feed: TestimonialFeed = Depends(get_testimonial_feed),
) -> Response:
    TestimonialRepository(db).delete(testimonial_id)
    feed.publish()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
