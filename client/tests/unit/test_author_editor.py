import pytest

from submitease.core.config import PortalConfig
from submitease.core.errors import (
    DuplicateEntityError,
    IndexOutOfRangeError,
    MinimumCardinalityError,
    PaperLockedError,
)
from submitease.core.policy import MinimumCardinalityPolicy
from submitease.services.author_editor import AuthorEditor, parse_user_id


def _order(editor):
    return editor.authors.to_order_vector()


def test_load_reconciles_authors_with_author_order(pending_paper):
    editor = AuthorEditor(pending_paper)
    assert editor.is_editable is True
    assert _order(editor) == [3, 1, 2]


def test_load_without_author_order_keeps_fetch_order(paper_factory):
    editor = AuthorEditor(paper_factory(AuthorOrder=None))
    assert _order(editor) == [1, 2, 3]


def test_add_by_id_parses_form_values_and_ignores_unknown(pending_paper, directory):
    editor = AuthorEditor(pending_paper)

    assert editor.add_by_id("5", directory) is True
    assert editor.add_by_id("", directory) is False
    assert editor.add_by_id("abc", directory) is False
    assert editor.add_by_id(99, directory) is False
    # 已在列表中的作者不会重复添加
    assert editor.add_by_id(1, directory) is False
    assert _order(editor) == [3, 1, 2, 5]


def test_candidates_excludes_current_authors(pending_paper, directory):
    editor = AuthorEditor(pending_paper)
    assert [u.id for u in editor.candidates(directory)] == [4, 5, 6, 7]


def test_invited_author_is_appended(pending_paper, user_factory):
    editor = AuthorEditor(pending_paper)
    editor.add(user_factory(100, "Invited"))
    assert _order(editor)[-1] == 100


def test_strict_add_from_config_raises_on_duplicate(pending_paper, user_factory):
    config = PortalConfig(env="test", base_url="http://portal", timeout=1.0, strict_add=True)
    editor = AuthorEditor(pending_paper, config=config)
    with pytest.raises(DuplicateEntityError):
        editor.add(user_factory(3))
    assert _order(editor) == [3, 1, 2]


def test_remove_enforces_at_least_one_author(paper_factory):
    editor = AuthorEditor(
        paper_factory(AuthorOrder=[], Authors=[{"id": 1, "firstname": "Solo"}])
    )
    with pytest.raises(MinimumCardinalityError) as exc_info:
        editor.remove(0)
    assert str(exc_info.value) == "At least one author is required."
    assert _order(editor) == [1]


def test_remove_by_index(pending_paper):
    editor = AuthorEditor(pending_paper)
    removed = editor.remove(0)
    assert removed.id == 3
    assert _order(editor) == [1, 2]


def test_custom_policy_is_respected(pending_paper):
    editor = AuthorEditor(pending_paper, policy=MinimumCardinalityPolicy(minimum=3))
    with pytest.raises(MinimumCardinalityError, match="At least 3 authors are required."):
        editor.remove(0)


def test_drag_end_moves_and_ignores_drop_outside(pending_paper):
    editor = AuthorEditor(pending_paper)
    editor.on_drag_end(0, None)
    assert _order(editor) == [3, 1, 2]

    editor.on_drag_end(0, 2)
    assert _order(editor) == [1, 2, 3]


def test_locked_paper_rejects_edits(locked_paper, directory, user_factory):
    editor = AuthorEditor(locked_paper)
    assert editor.is_editable is False
    # 只读模式下仍可展示排序后的作者
    assert _order(editor) == [3, 1, 2]

    with pytest.raises(PaperLockedError):
        editor.add(user_factory(9))
    with pytest.raises(PaperLockedError):
        editor.add_by_id(4, directory)
    with pytest.raises(PaperLockedError):
        editor.remove(0)
    with pytest.raises(PaperLockedError):
        editor.on_drag_end(0, 1)
    assert _order(editor) == [3, 1, 2]


def test_save_payload_and_apply_saved(pending_paper, paper_factory):
    editor = AuthorEditor(pending_paper)
    editor.on_drag_end(2, 0)
    assert editor.save_payload() == {"authorIds": [2, 3, 1], "order": [2, 3, 1]}

    editor.apply_saved(paper_factory(AuthorOrder=[2, 3, 1]))
    assert _order(editor) == [2, 3, 1]


@pytest.mark.parametrize(
    "raw,expected",
    [("7", 7), (" 12 ", 12), (3, 3), ("", None), (None, None), ("x1", None), (True, None)],
)
def test_parse_user_id(raw, expected):
    assert parse_user_id(raw) == expected


def test_remove_on_empty_author_list_reports_index_error(paper_factory):
    editor = AuthorEditor(paper_factory(AuthorOrder=[], Authors=[]))
    with pytest.raises(IndexOutOfRangeError):
        editor.remove(0)
