"""
取数 -> reconcile -> 编辑 -> 保存 -> 再 reconcile 的完整往返。

中文注释: 保存失败时工作列表保持不变（页面提示错误即可，不回滚、不重试）。
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from submitease.lib.api_client import PortalClient, portal
from submitease.models.paper import Review
from submitease.models.participant import Participant
from submitease.services.author_editor import AuthorEditor
from submitease.services.review_table import ReminderGroups, remindable
from submitease.services.reviewer_assignment import ReviewerAssignment

logger = logging.getLogger("submitease.ordering_workflow")


def open_author_editor(
    paper_id: Any, *, journal: bool = False, client: Optional[PortalClient] = None
) -> AuthorEditor:
    client = client or portal
    paper = client.get_paper(paper_id, journal=journal)
    return AuthorEditor(paper, config=client.config)


def _author_payload(editor: AuthorEditor, extra_fields: Optional[dict[str, Any]]) -> dict[str, Any]:
    payload: dict[str, Any] = {"paperId": editor.paper.id}
    payload.update(extra_fields or {})
    payload.update(editor.save_payload())
    return payload


def save_authors(
    editor: AuthorEditor,
    *,
    journal: bool = False,
    extra_fields: Optional[dict[str, Any]] = None,
    client: Optional[PortalClient] = None,
) -> AuthorEditor:
    editor.ensure_editable()
    client = client or portal
    saved = client.edit_paper(_author_payload(editor, extra_fields), journal=journal)
    editor.apply_saved(saved)
    logger.info("[OrderingWorkflow] authors saved for paper %s", editor.paper.id)
    return editor


def submit_authors(
    editor: AuthorEditor,
    *,
    journal: bool = False,
    extra_fields: Optional[dict[str, Any]] = None,
    client: Optional[PortalClient] = None,
) -> AuthorEditor:
    """提交评审：携带当前作者顺序，成功后论文锁定（editor 随之变为只读）。"""
    editor.ensure_editable()
    client = client or portal
    submitted = client.submit_paper(_author_payload(editor, extra_fields), journal=journal)
    editor.apply_saved(submitted)
    logger.info(
        "[OrderingWorkflow] paper %s submitted (status=%s)", editor.paper.id, editor.paper.Status
    )
    return editor


def open_reviewer_assignment(
    paper_id: Any, *, client: Optional[PortalClient] = None
) -> ReviewerAssignment:
    client = client or portal
    paper = client.get_paper(paper_id)
    return ReviewerAssignment(paper, strict_add=client.config.strict_add)


def save_reviewers(
    assignment: ReviewerAssignment, *, client: Optional[PortalClient] = None
) -> ReviewerAssignment:
    client = client or portal
    payload = assignment.save_payload()
    saved = client.assign_reviewers(payload["paperId"], payload["reviewerIds"], payload["order"])
    assignment.apply_saved(saved)
    logger.info("[OrderingWorkflow] reviewers assigned for paper %s", assignment.paper.id)
    return assignment


def _require_invite_fields(email: str, firstname: str, lastname: str) -> None:
    if not (email or "").strip() or not (firstname or "").strip() or not (lastname or "").strip():
        raise ValueError("Please fill in at least first name, last name, and email.")


def invite_author(
    editor: AuthorEditor,
    *,
    email: str,
    firstname: str,
    lastname: str,
    organisation: str = "",
    country: str = "",
    client: Optional[PortalClient] = None,
) -> Participant:
    """创建作者账号并追加到作者列表末尾。"""
    editor.ensure_editable()
    _require_invite_fields(email, firstname, lastname)
    client = client or portal
    user = client.invite_user(
        email=email,
        firstname=firstname,
        lastname=lastname,
        organisation=organisation,
        country=country,
        role="Author",
    )
    editor.add(user)
    return user


def invite_reviewer(
    assignment: ReviewerAssignment,
    *,
    email: str,
    firstname: str,
    lastname: str,
    organisation: str = "",
    country: str = "",
    invited_by: Optional[int] = None,
    client: Optional[PortalClient] = None,
) -> Participant:
    _require_invite_fields(email, firstname, lastname)
    client = client or portal
    user = client.invite_user(
        email=email,
        firstname=firstname,
        lastname=lastname,
        organisation=organisation,
        country=country,
        role="Reviewer",
        invited_by=invited_by,
    )
    assignment.add(user)
    return user


def send_reminders(
    paper_id: Any,
    selected_ids: Iterable[int],
    reviews: Iterable[Review],
    *,
    invited: Iterable[Participant] = (),
    client: Optional[PortalClient] = None,
) -> ReminderGroups:
    """
    中文注释:
    - 先按评审状态分组（已提交的不催），再分别调用两个催审接口；
    - 某一组为空则跳过对应接口；第一组失败直接抛错，不再发第二组。
    """
    groups = remindable(selected_ids, reviews, invited)
    if groups.is_empty:
        return groups
    client = client or portal
    if groups.under_review:
        client.remind_reviewers(paper_id, groups.under_review)
    if groups.pending:
        client.remind_invited_reviewers(paper_id, groups.pending)
    logger.info(
        "[OrderingWorkflow] reminders sent for paper %s: under_review=%s pending=%s",
        paper_id,
        len(groups.under_review),
        len(groups.pending),
    )
    return groups
