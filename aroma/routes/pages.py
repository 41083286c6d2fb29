"""
Public HTML pages.

Every page lives under a locale prefix (/en, /ar, /ru). Localized menu
fields are resolved with aroma.i18n, so a missing translation renders as
an empty string instead of falling back to English. Arabic pages are
rendered right-to-left.
"""

import logging
from functools import partial
from pathlib import Path
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from pymongo.database import Database

from aroma.core.config import get_settings
from aroma.database import get_db
from aroma.i18n import DEFAULT_LOCALE, LOCALES, Locale, localized_member, localized_value, parse_locale
from aroma.repositories import (
    MenuCardCopyRepository,
    MenuRepository,
    RestaurantStoryRepository,
    SettingsRepository,
    StaticImageRepository,
    TestimonialRepository,
    get_active_or_none,
)
from aroma.schemas import ImageCategory

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

# Used when no active StaticImage with that name exists
DEFAULT_IMAGES = {
    "Homepage Hero": "/images/hero.jpg",
    "Menu-page Hero": "/images/menu-hero.jpg",
    "Gallery Hero": "/images/gallery-hero.jpg",
    "Find-us Hero": "/images/find-us-hero.jpg",
    "Logo": "/images/logo.png",
}

router = APIRouter(tags=["Pages"])


def resolve_locale(locale: str) -> Locale:
    try:
        return parse_locale(locale)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Page not found")


def image_for(images: StaticImageRepository, name: str) -> dict[str, str]:
    image = images.find_by_name(name)
    if image:
        return {"url": image["imageUrl"], "alt": image.get("altText", name)}
    return {"url": DEFAULT_IMAGES.get(name, ""), "alt": name}


def page_context(locale: Locale, db: Database, **extra: Any) -> dict[str, Any]:
    settings = get_settings()
    images = StaticImageRepository(db)
    return {
        "locale": locale.value,
        "locales": [loc.value for loc in LOCALES],
        "direction": "rtl" if locale.is_rtl else "ltr",
        "restaurant_name": settings.restaurant_name,
        "logo": image_for(images, "Logo"),
        "t": partial(localized_value, locale=locale),
        "tr": partial(localized_member, locale=locale),
        **extra,
    }


@router.get("/", include_in_schema=False)
def index() -> RedirectResponse:
    return RedirectResponse(url=f"/{DEFAULT_LOCALE.value}")


@router.get("/{locale}", response_class=HTMLResponse)
def home_page(
    request: Request,
    locale: Locale = Depends(resolve_locale),
    db: Database = Depends(get_db),
) -> HTMLResponse:
    story = get_active_or_none(RestaurantStoryRepository(db))
    menu_copy = get_active_or_none(MenuCardCopyRepository(db))
    testimonials = TestimonialRepository(db).list_active(limit=get_settings().testimonial_feed_size)
    context = page_context(
        locale,
        db,
        hero=image_for(StaticImageRepository(db), "Homepage Hero"),
        story=story,
        paragraphs=(menu_copy or {}).get("paragraphs", {}).get(locale.value, []),
        testimonials=testimonials,
    )
    return templates.TemplateResponse(request, "home.html", context)


@router.get("/{locale}/menu", response_class=HTMLResponse)
def menu_page(
    request: Request,
    locale: Locale = Depends(resolve_locale),
    db: Database = Depends(get_db),
) -> HTMLResponse:
    context = page_context(
        locale,
        db,
        hero=image_for(StaticImageRepository(db), "Menu-page Hero"),
        sections=MenuRepository(db).list_all(),
    )
    return templates.TemplateResponse(request, "menu.html", context)


@router.get("/{locale}/gallery", response_class=HTMLResponse)
def gallery_page(
    request: Request,
    locale: Locale = Depends(resolve_locale),
    db: Database = Depends(get_db),
) -> HTMLResponse:
    images = StaticImageRepository(db)
    context = page_context(
        locale,
        db,
        hero=image_for(images, "Gallery Hero"),
        images=images.list_by_category(ImageCategory.GALLERY),
    )
    return templates.TemplateResponse(request, "gallery.html", context)


@router.get("/{locale}/find-us", response_class=HTMLResponse)
def find_us_page(
    request: Request,
    locale: Locale = Depends(resolve_locale),
    db: Database = Depends(get_db),
) -> HTMLResponse:
    context = page_context(
        locale,
        db,
        hero=image_for(StaticImageRepository(db), "Find-us Hero"),
        locations=SettingsRepository(db).locations(),
    )
    return templates.TemplateResponse(request, "find_us.html", context)
