"""
Menu Section Editor

Server-side model of the admin "edit menu" screen. The editor owns a
working copy of one section and exposes explicit mutation methods over
indexed containers (subsections by position, items by position within a
subsection). Destructive edits go through a confirmation step.

State flow:

    LOADING --load ok--> READY --save--> SAVING --> SUCCESS
       |                   ^                 |
       +--load failed--> ERROR <--save failed+
                           |
                           +--resume (section loaded)--> READY

Mutations are only accepted in READY.
"""

import copy
import logging
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

from pydantic import ValidationError
from pymongo.errors import PyMongoError

from aroma.core.errors import AromaError, ValidationFailure
from aroma.i18n import Locale, MenuField, field_key
from aroma.repositories.menu import MenuRepository
from aroma.schemas import MenuSectionIn

logger = logging.getLogger(__name__)

TEMP_ID_PREFIX = "tmp-"

LOCALIZED_ITEM_FIELDS = (MenuField.NAME, MenuField.DESCRIPTION)
PLAIN_ITEM_FIELDS = ("price", "image")


class EditorState(str, Enum):
    LOADING = "loading"
    READY = "ready"
    SAVING = "saving"
    SUCCESS = "success"
    ERROR = "error"


class EditorStateError(AromaError):
    """An operation was attempted in a state that does not allow it."""

    status_code = 409


@dataclass
class PendingDelete:
    """A delete awaiting confirmation. `item_index` is None for a subsection."""
    subsection_index: int
    item_index: Optional[int] = None

    @property
    def kind(self) -> str:
        return "subsection" if self.item_index is None else "item"


def new_temp_id() -> str:
    return f"{TEMP_ID_PREFIX}{uuid.uuid4().hex[:10]}"


def is_temp_id(value: Optional[str]) -> bool:
    return bool(value) and value.startswith(TEMP_ID_PREFIX)


def empty_item() -> dict[str, Any]:
    item: dict[str, Any] = {"id": new_temp_id(), "price": "", "image": None}
    for field in LOCALIZED_ITEM_FIELDS:
        for locale in Locale:
            item[field_key(field, locale)] = ""
    return item


def empty_subsection() -> dict[str, Any]:
    sub: dict[str, Any] = {"items": []}
    for locale in Locale:
        sub[field_key(MenuField.SECTION, locale)] = ""
    return sub


class MenuEditor:
    """Edit session for a single menu section."""

    def __init__(self, repository: MenuRepository, section_id: str):
        self.repository = repository
        self.section_id = section_id
        self.state = EditorState.LOADING
        self.section: Optional[dict[str, Any]] = None
        self.pending_delete: Optional[PendingDelete] = None
        self.error: Optional[str] = None
        self.errors: list[dict[str, str]] = []

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def load(self) -> "MenuEditor":
        if self.state is not EditorState.LOADING:
            raise EditorStateError(f"Cannot load in state {self.state.value}")
        try:
            doc = self.repository.get_section(self.section_id)
        except AromaError as e:
            self._fail(e.message)
            return self

        self.section = {
            "title_en": doc.get("title_en", ""),
            "title_ar": doc.get("title_ar", ""),
            "title_ru": doc.get("title_ru", ""),
            "subsections": copy.deepcopy(doc.get("subsections", [])),
        }
        self.state = EditorState.READY
        logger.debug(f"Editor loaded section {self.section_id}")
        return self

    def save(self) -> Optional[dict[str, Any]]:
        """
        Persist the working copy.

        Returns the saved section, or None when validation or the write
        failed (see `error` / `errors`).
        """
        self._require_ready()
        self.state = EditorState.SAVING
        self.errors = []
        try:
            payload = self.to_payload()
            saved = self.repository.update_section(self.section_id, payload)
        except ValidationError as e:
            self.errors = [
                {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
                for err in e.errors()
            ]
            self._fail("Validation failed")
            return None
        except ValidationFailure as e:
            self.errors = e.errors
            self._fail(e.message)
            return None
        except AromaError as e:
            self._fail(e.message)
            return None
        except PyMongoError as e:
            logger.error(f"Database error saving section {self.section_id}: {e}")
            self._fail("Could not save the section")
            return None

        self.state = EditorState.SUCCESS
        logger.info(f"Editor saved section {self.section_id}")
        return saved

    def resume(self) -> None:
        """Return to editing after a failed save."""
        if self.state is not EditorState.ERROR or self.section is None:
            raise EditorStateError("Nothing to resume")
        self.error = None
        self.state = EditorState.READY

    def to_payload(self) -> MenuSectionIn:
        """Validated request body with temporary ids removed."""
        section = copy.deepcopy(self.section)
        for sub in section["subsections"]:
            if is_temp_id(sub.get("id")):
                sub.pop("id")
            for item in sub.get("items", []):
                if is_temp_id(item.get("id")):
                    item.pop("id")
        return MenuSectionIn(**section)

    # =========================================================================
    # MUTATIONS
    # =========================================================================

    def set_title(self, locale: Union[Locale, str], value: str) -> None:
        self._require_ready()
        self.section[field_key(MenuField.TITLE, locale)] = value

    def set_subsection_title(
        self, subsection_index: int, locale: Union[Locale, str], value: str
    ) -> None:
        self._require_ready()
        self._subsection(subsection_index)[field_key(MenuField.SECTION, locale)] = value

    def set_item_field(
        self,
        subsection_index: int,
        item_index: int,
        field: str,
        value: Optional[str],
        locale: Optional[Union[Locale, str]] = None,
    ) -> None:
        """
        Set `price` / `image`, or a localized `name` / `description`
        (which requires `locale`).
        """
        self._require_ready()
        item = self._item(subsection_index, item_index)
        if field in PLAIN_ITEM_FIELDS:
            item[field] = value
            return
        if MenuField(field) not in LOCALIZED_ITEM_FIELDS:
            raise ValueError(f"{field} is not an item field")
        if locale is None:
            raise ValueError(f"{field} needs a locale")
        item[field_key(field, locale)] = value

    def add_subsection(self) -> int:
        self._require_ready()
        self.section["subsections"].append(empty_subsection())
        return len(self.section["subsections"]) - 1

    def add_item(self, subsection_index: int) -> str:
        """Append a blank item; returns its temporary id."""
        self._require_ready()
        item = empty_item()
        self._subsection(subsection_index)["items"].append(item)
        return item["id"]

    def request_delete_item(self, subsection_index: int, item_index: int) -> None:
        self._require_ready()
        self._item(subsection_index, item_index)
        self.pending_delete = PendingDelete(subsection_index, item_index)

    def request_delete_subsection(self, subsection_index: int) -> None:
        self._require_ready()
        self._subsection(subsection_index)
        self.pending_delete = PendingDelete(subsection_index)

    def confirm_delete(self) -> None:
        self._require_ready()
        target = self.pending_delete
        if target is None:
            raise EditorStateError("No delete pending")
        if target.item_index is None:
            del self.section["subsections"][target.subsection_index]
        else:
            del self._subsection(target.subsection_index)["items"][target.item_index]
        self.pending_delete = None

    def cancel_delete(self) -> None:
        self.pending_delete = None

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _require_ready(self) -> None:
        if self.state is not EditorState.READY:
            raise EditorStateError(f"Editor is {self.state.value}, not ready")

    def _fail(self, message: str) -> None:
        logger.warning(f"Editor for section {self.section_id}: {message}")
        self.error = message
        self.state = EditorState.ERROR

    def _subsection(self, index: int) -> dict[str, Any]:
        subsections = self.section["subsections"]
        if not 0 <= index < len(subsections):
            raise IndexError(f"No subsection at {index}")
        return subsections[index]

    def _item(self, subsection_index: int, item_index: int) -> dict[str, Any]:
        items = self._subsection(subsection_index)["items"]
        if not 0 <= item_index < len(items):
            raise IndexError(f"No item at {subsection_index}/{item_index}")
        return items[item_index]
