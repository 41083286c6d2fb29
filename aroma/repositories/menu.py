"""
Menu Section Repository

Menu sections are stored nested: section -> subsections -> items.
List views flatten that shape with $unwind so that pagination counts
items rather than sections:

    - search: matching items as flat rows carrying their subsection and
      section titles
    - no search: a page of items regrouped under their parent section
    - all: every section document, unpaginated

Paging over items and regrouping afterwards means a section whose items
straddle a page boundary shows up partially on both pages. Callers
(the admin menu table) rely on item-level paging, so this is kept.
"""

import logging
from typing import Any, Optional

from bson import ObjectId
from pymongo import ReturnDocument

from aroma.core.errors import NotFoundError
from aroma.database import MENU_SECTIONS
from aroma.i18n import MenuField, localized_keys
from aroma.repositories.base import (
    BaseRepository,
    is_object_id,
    object_id,
    page_skip,
    regex_filter,
    serialize,
    total_pages,
    utcnow,
)
from aroma.schemas import (
    FlattenedMenuItem,
    MenuSectionIn,
    MenuSectionOut,
    PaginatedResponse,
)

logger = logging.getLogger(__name__)

ITEM_PATH = "subsections.items"

SEARCH_FIELDS = (
    [f"{ITEM_PATH}.{key}" for key in localized_keys(MenuField.NAME)]
    + [f"{ITEM_PATH}.{key}" for key in localized_keys(MenuField.DESCRIPTION)]
    + [f"{ITEM_PATH}.price"]
    + [f"subsections.{key}" for key in localized_keys(MenuField.SECTION)]
    + localized_keys(MenuField.TITLE)
)

# Section documents in insertion order, then one row per item
FLATTEN_STAGES: list[dict[str, Any]] = [
    {"$sort": {"_id": 1}},
    {"$unwind": "$subsections"},
    {"$unwind": f"${ITEM_PATH}"},
]


def search_match(term: str) -> dict[str, Any]:
    """$match stage selecting flattened rows where any localized field matches."""
    pattern = regex_filter(term)
    return {"$match": {"$or": [{field: pattern} for field in SEARCH_FIELDS]}}


def build_section_document(payload: MenuSectionIn) -> dict[str, Any]:
    """
    Convert a validated payload into the stored shape.

    Subsections and items keep their id when it is a valid ObjectId;
    anything else (missing, or a temporary id from the editor) gets a
    fresh one.
    """
    subsections = []
    for sub in payload.subsections:
        items = []
        for item in sub.items:
            data = item.model_dump(exclude={"id"})
            data["_id"] = ObjectId(item.id) if is_object_id(item.id) else ObjectId()
            items.append(data)
        subsections.append({
            "_id": ObjectId(sub.id) if is_object_id(sub.id) else ObjectId(),
            "section_en": sub.section_en,
            "section_ar": sub.section_ar,
            "section_ru": sub.section_ru,
            "items": items,
        })

    return {
        "title_en": payload.title_en,
        "title_ar": payload.title_ar,
        "title_ru": payload.title_ru,
        "subsections": subsections,
    }


def regroup_rows(rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """
    Fold flattened rows back into section documents.

    One entry per section in first-appearance order; rows of the same
    subsection are collected under one subsection entry.
    """
    sections: dict[Any, dict[str, Any]] = {}
    subsections: dict[tuple, dict[str, Any]] = {}

    for position, row in enumerate(rows):
        section_key = row["_id"]
        section = sections.get(section_key)
        if section is None:
            section = {
                "_id": row["_id"],
                "title_en": row.get("title_en", ""),
                "title_ar": row.get("title_ar", ""),
                "title_ru": row.get("title_ru", ""),
                "subsections": [],
            }
            sections[section_key] = section

        sub = row["subsections"]
        sub_key = (section_key, sub.get("_id", f"row-{position}"))
        entry = subsections.get(sub_key)
        if entry is None:
            entry = {
                "_id": sub.get("_id"),
                "section_en": sub.get("section_en", ""),
                "section_ar": sub.get("section_ar", ""),
                "section_ru": sub.get("section_ru", ""),
                "items": [],
            }
            subsections[sub_key] = entry
            section["subsections"].append(entry)
        entry["items"].append(sub["items"])

    return list(sections.values())


class MenuRepository(BaseRepository):
    """Queries and edits over the `menu_sections` collection."""

    collection_name = MENU_SECTIONS

    # =========================================================================
    # LIST / SEARCH
    # =========================================================================

    def list_all(self) -> list[dict[str, Any]]:
        """Every section, unpaginated, in insertion order."""
        return [serialize(doc) for doc in self.collection.find({}).sort("_id", 1)]

    def list_sections(
        self,
        page: int = 1,
        limit: int = 10,
        search: Optional[str] = None,
        include_all: bool = False,
    ):
        """
        Entry point behind GET /api/menu-sections.

        Returns a plain list when `include_all` is set, otherwise a PaginatedResponse
        of FlattenedMenuItem (search) or MenuSectionOut (no search).
        """
        if include_all:
            return self.list_all()

        search = (search or "").strip()
        if search:
            return self.search_items(search, page, limit)
        return self.paginate_sections(page, limit)

    def count_items(self, match: Optional[dict[str, Any]] = None) -> int:
        pipeline = list(FLATTEN_STAGES)
        if match:
            pipeline.append(match)
        pipeline.append({"$group": {"_id": None, "total": {"$sum": 1}}})
        result = list(self.collection.aggregate(pipeline))
        return result[0]["total"] if result else 0

    def search_items(
        self,
        term: str,
        page: int = 1,
        limit: int = 10,
    ) -> PaginatedResponse[FlattenedMenuItem]:
        match = search_match(term)
        total = self.count_items(match)

        pipeline = FLATTEN_STAGES + [
            match,
            {"$skip": page_skip(page, limit)},
            {"$limit": limit},
            {
                "$project": {
                    "_id": 0,
                    "item": f"${ITEM_PATH}",
                    "section": "$subsections.section_en",
                    "title": "$title_en",
                }
            },
        ]

        rows = []
        for doc in self.collection.aggregate(pipeline):
            row = serialize(doc["item"])
            row["section"] = doc.get("section") or ""
            row["title"] = doc.get("title") or ""
            rows.append(FlattenedMenuItem(**row))

        logger.debug(f"Menu search '{term}': {total} matches, page {page}")
        return PaginatedResponse[FlattenedMenuItem](
            data=rows,
            total=total,
            page=page,
            limit=limit,
            totalPages=total_pages(total, limit),
        )

    def paginate_sections(
        self,
        page: int = 1,
        limit: int = 10,
    ) -> PaginatedResponse[MenuSectionOut]:
        total = self.count_items()

        pipeline = FLATTEN_STAGES + [
            {"$skip": page_skip(page, limit)},
            {"$limit": limit},
        ]
        rows = list(self.collection.aggregate(pipeline))
        sections = [MenuSectionOut(**serialize(s)) for s in regroup_rows(rows)]

        return PaginatedResponse[MenuSectionOut](
            data=sections,
            total=total,
            page=page,
            limit=limit,
            totalPages=total_pages(total, limit),
        )

    # =========================================================================
    # SINGLE SECTION
    # =========================================================================

    def get_section(self, section_id: str) -> dict[str, Any]:
        doc = self.collection.find_one({"_id": object_id(section_id)})
        if not doc:
            raise NotFoundError("Section", section_id)
        return serialize(doc)

    def create_section(self, payload: MenuSectionIn) -> dict[str, Any]:
        doc = build_section_document(payload)
        now = utcnow()
        doc["createdAt"] = now
        doc["updatedAt"] = now
        result = self.collection.insert_one(doc)
        logger.info(f"Menu section created: {payload.title_en} ({result.inserted_id})")
        return serialize(doc)

    def update_section(self, section_id: str, payload: MenuSectionIn) -> dict[str, Any]:
        doc = build_section_document(payload)
        doc["updatedAt"] = utcnow()
        updated = self.collection.find_one_and_update(
            {"_id": object_id(section_id)},
            {"$set": doc},
            return_document=ReturnDocument.AFTER,
        )
        if not updated:
            raise NotFoundError("Section", section_id)
        logger.info(f"Menu section updated: {section_id}")
        return serialize(updated)

    def delete_section(self, section_id: str) -> None:
        result = self.collection.delete_one({"_id": object_id(section_id)})
        if result.deleted_count == 0:
            raise NotFoundError("Section", section_id)
        logger.info(f"Menu section deleted: {section_id}")

    # =========================================================================
    # SINGLE ITEM
    # =========================================================================

    def delete_item(self, item_id: str) -> dict[str, Any]:
        """
        Remove one item from whichever section holds it.

        Subsections left without items are dropped, and the section
        document itself is deleted once it has no subsections.

        Returns:
            {"success": True, "sectionDeleted": bool}
        """
        oid = object_id(item_id)
        section = self.collection.find_one({f"{ITEM_PATH}._id": oid})
        if not section:
            raise NotFoundError("Item", item_id)

        subsections = []
        for sub in section.get("subsections", []):
            items = [item for item in sub.get("items", []) if item.get("_id") != oid]
            if items:
                subsections.append({**sub, "items": items})

        if not subsections:
            self.collection.delete_one({"_id": section["_id"]})
            logger.info(f"Menu item {item_id} deleted; section {section['_id']} removed")
            return {"success": True, "sectionDeleted": True}

        self.collection.update_one(
            {"_id": section["_id"]},
            {"$set": {"subsections": subsections, "updatedAt": utcnow()}},
        )
        logger.info(f"Menu item {item_id} deleted from section {section['_id']}")
        return {"success": True, "sectionDeleted": False}
