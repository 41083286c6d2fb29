"""
                        Services Module

Business logic that sits beside the repositories. External providers
follow the hybrid pattern: a Mock (development) and a Real (production)
implementation behind one factory.

Services:
    - notifications: reservation emails (SendGrid)
    - storage: uploaded image storage (Cloudinary)
    - menu_editor: admin menu edit session
    - testimonial_feed: live testimonial updates over SSE
"""

from aroma.services.menu_editor import EditorState, MenuEditor
from aroma.services.testimonial_feed import TestimonialFeed, get_testimonial_feed

__all__ = ["EditorState", "MenuEditor", "TestimonialFeed", "get_testimonial_feed"]
