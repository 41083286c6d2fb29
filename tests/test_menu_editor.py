"""
The admin menu editor state machine.
"""

import pytest
from bson import ObjectId
from pymongo.errors import ServerSelectionTimeoutError

from aroma.repositories.menu import MenuRepository
from aroma.schemas import MenuSectionIn
from aroma.services.menu_editor import (
    EditorState,
    EditorStateError,
    MenuEditor,
    is_temp_id,
)

from tests.factories import appetizers


@pytest.fixture
def repo(db) -> MenuRepository:
    return MenuRepository(db)


@pytest.fixture
def section(repo) -> dict:
    return repo.create_section(MenuSectionIn(**appetizers()))


@pytest.fixture
def editor(repo, section) -> MenuEditor:
    return MenuEditor(repo, section["id"]).load()


def fill_item(editor: MenuEditor, sub: int, index: int, name: str, price: str) -> None:
    for locale in ("en", "ar", "ru"):
        editor.set_item_field(sub, index, "name", f"{name} {locale}", locale=locale)
        editor.set_item_field(sub, index, "description", f"{name} desc {locale}", locale=locale)
    editor.set_item_field(sub, index, "price", price)


def test_load_ready(editor):
    assert editor.state is EditorState.READY
    assert editor.section["title_en"] == "Appetizers"
    assert len(editor.section["subsections"][0]["items"]) == 2


def test_load_unknown_section(repo):
    editor = MenuEditor(repo, str(ObjectId())).load()

    assert editor.state is EditorState.ERROR
    assert editor.error == "Section not found"
    with pytest.raises(EditorStateError):
        editor.resume()


def test_mutations_need_ready(repo, section):
    editor = MenuEditor(repo, section["id"])

    with pytest.raises(EditorStateError):
        editor.set_title("en", "Starters")


def test_edit_and_save(editor, repo, section):
    editor.set_title("en", "Starters")
    editor.set_subsection_title(0, "ru", "Холодные")

    saved = editor.save()

    assert editor.state is EditorState.SUCCESS
    assert saved["title_en"] == "Starters"
    stored = repo.get_section(section["id"])
    assert stored["subsections"][0]["section_ru"] == "Холодные"
    assert stored["subsections"][0]["items"][0]["id"] == section["subsections"][0]["items"][0]["id"]


def test_added_item_gets_real_id(editor, repo, section):
    temp_id = editor.add_item(0)
    assert is_temp_id(temp_id)
    fill_item(editor, 0, 2, "Falafel", "6.00")

    saved = editor.save()

    ids = [item["id"] for item in saved["subsections"][0]["items"]]
    assert len(ids) == 3
    assert temp_id not in ids
    assert all(ObjectId.is_valid(i) for i in ids)


def test_added_subsection(editor):
    index = editor.add_subsection()
    for locale in ("en", "ar", "ru"):
        editor.set_subsection_title(index, locale, f"Hot {locale}")
    editor.add_item(index)
    fill_item(editor, index, 0, "Samosa", "7.00")

    saved = editor.save()

    assert [s["section_en"] for s in saved["subsections"]] == ["Cold", "Hot en"]


def test_blank_item_fails_validation_and_can_resume(editor, repo, section):
    editor.add_item(0)

    assert editor.save() is None
    assert editor.state is EditorState.ERROR
    assert editor.error == "Validation failed"
    assert any(e["field"].endswith("name_en") for e in editor.errors)
    assert len(repo.get_section(section["id"])["subsections"][0]["items"]) == 2

    editor.resume()
    assert editor.state is EditorState.READY
    fill_item(editor, 0, 2, "Falafel", "6.00")
    assert editor.save() is not None


def test_localized_field_needs_locale(editor):
    with pytest.raises(ValueError):
        editor.set_item_field(0, 0, "name", "Hummus")
    with pytest.raises(ValueError):
        editor.set_item_field(0, 0, "calories", "100", locale="en")


def test_out_of_range(editor):
    with pytest.raises(IndexError):
        editor.set_item_field(0, 9, "price", "1.00")
    with pytest.raises(IndexError):
        editor.request_delete_subsection(3)


def test_delete_item_needs_confirmation(editor):
    editor.request_delete_item(0, 0)
    assert editor.pending_delete.kind == "item"
    assert len(editor.section["subsections"][0]["items"]) == 2

    editor.confirm_delete()

    assert [i["name_en"] for i in editor.section["subsections"][0]["items"]] == ["Baba Ganoush"]
    assert editor.pending_delete is None


def test_cancel_delete(editor):
    editor.request_delete_subsection(0)
    assert editor.pending_delete.kind == "subsection"

    editor.cancel_delete()

    assert len(editor.section["subsections"]) == 1
    with pytest.raises(EditorStateError):
        editor.confirm_delete()


def test_confirm_subsection_delete(editor):
    editor.request_delete_subsection(0)
    editor.confirm_delete()

    assert editor.section["subsections"] == []


def test_save_after_section_removed(editor, repo, section):
    repo.delete_section(section["id"])

    assert editor.save() is None
    assert editor.error == "Section not found"


def test_database_failure_during_save_is_recoverable(editor, repo, monkeypatch):
    def unreachable(section_id, payload):
        raise ServerSelectionTimeoutError("No servers available")

    monkeypatch.setattr(repo, "update_section", unreachable)

    assert editor.save() is None
    assert editor.state is EditorState.ERROR
    assert editor.error == "Could not save the section"

    editor.resume()
    assert editor.state is EditorState.READY
