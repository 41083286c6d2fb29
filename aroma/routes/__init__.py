"""
HTTP routers.

JSON endpoints live under /api; `pages` serves the public HTML site and
must be included last because of its catch-all `/{locale}` route.
"""

from aroma.routes import (
    auth,
    content,
    menu,
    pages,
    reservations,
    settings,
    static_images,
    testimonials,
    uploads,
)

api_routers = [
    auth.router,
    menu.router,
    reservations.router,
    testimonials.router,
    content.router,
    static_images.router,
    settings.router,
    uploads.router,
]

__all__ = ["api_routers", "pages"]
