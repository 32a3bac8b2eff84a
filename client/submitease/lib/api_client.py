"""
Portal API client: 论文门户后端的取数（fetch）与保存（save）调用。

中文注释:
- 只封装作者/审稿人排序流程需要的接口；其它页面接口不在这里。
- 非 2xx 统一抛 PortalAPIError，message 优先取响应体里的 message 字段。
- 网络层异常（超时/连接失败）保持 httpx 原样抛出，由页面层提示用户。
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

import httpx

from submitease.core.config import PortalConfig
from submitease.models.paper import Paper
from submitease.models.participant import Participant

logger = logging.getLogger("submitease.portal_client")


class PortalAPIError(Exception):
    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


def _error_message(response: httpx.Response, default: str) -> str:
    try:
        body = response.json()
    except ValueError:
        return default
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return default


class PortalClient:
    def __init__(
        self,
        config: Optional[PortalConfig] = None,
        *,
        http: Optional[httpx.Client] = None,
    ):
        self.config = config or PortalConfig.from_env()
        self._http = http or httpx.Client(
            base_url=self.config.base_url,
            timeout=self.config.timeout,
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "PortalClient":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def _request(
        self, method: str, path: str, *, default_error: str, expect_json: bool = True, **kwargs: Any
    ) -> Any:
        response = self._http.request(method, path, **kwargs)
        if response.is_error:
            message = _error_message(response, default_error)
            logger.warning("[PortalClient] %s %s failed: %s", method, path, message)
            raise PortalAPIError(response.status_code, message)
        if not expect_json:
            return None
        try:
            return response.json()
        except ValueError:
            logger.warning("[PortalClient] %s %s returned non-JSON body", method, path)
            raise PortalAPIError(response.status_code, default_error) from None

    @staticmethod
    def _paper_from(body: Any) -> Paper:
        return Paper.model_validate(body.get("paper") if isinstance(body, dict) else body)

    def get_paper(self, paper_id: Any, *, journal: bool = False) -> Paper:
        prefix = "/journal" if journal else ""
        body = self._request(
            "GET",
            f"{prefix}/getpaperbyid/{paper_id}",
            default_error="Failed to fetch paper details.",
        )
        return self._paper_from(body)

    def list_users(self) -> list[Participant]:
        body = self._request("GET", "/users/emails", default_error="Failed to fetch users.")
        rows = body.get("users") if isinstance(body, dict) else None
        return [Participant.model_validate(row) for row in rows or []]

    def edit_paper(self, payload: dict[str, Any], *, journal: bool = False) -> Paper:
        prefix = "/journal" if journal else ""
        body = self._request(
            "POST",
            f"{prefix}/editpaper",
            json=payload,
            default_error="Failed to update paper.",
        )
        return self._paper_from(body)

    def submit_paper(self, payload: dict[str, Any], *, journal: bool = False) -> Paper:
        """提交评审：与 edit_paper 同样的字段，成功后论文离开 Pending Submission。"""
        prefix = "/journal" if journal else ""
        body = self._request(
            "POST",
            f"{prefix}/submitpaper",
            json=payload,
            default_error="Failed to submit paper.",
        )
        return self._paper_from(body)

    def invite_user(
        self,
        *,
        email: str,
        firstname: str,
        lastname: str,
        role: str,
        organisation: str = "",
        country: str = "",
        invited_by: Optional[int] = None,
        password: Optional[str] = None,
    ) -> Participant:
        """
        创建临时账号（作者/审稿人邀请），返回新用户，由调用方追加到列表。

        中文注释: 不传 password 时由后端生成临时密码并随邀请邮件发送。
        """
        payload: dict[str, Any] = {
            "email": email,
            "firstname": firstname,
            "lastname": lastname,
            "organisation": organisation,
            "country": country,
            "role": [role],
            "expertise": [],
            "sendEmail": True,
            "invitedBy": invited_by,
        }
        if password:
            payload["password"] = password
        body = self._request(
            "POST",
            "/users",
            json=payload,
            default_error="Failed to invite user.",
        )
        return Participant.model_validate(body)

    def remind_reviewers(self, paper_id: Any, reviewer_ids: list[int]) -> None:
        self._request(
            "POST",
            "/remind-reviewers",
            json={"paperId": paper_id, "reviewerIds": reviewer_ids},
            default_error="Failed to send reminders to under-review reviewers.",
            expect_json=False,
        )

    def remind_invited_reviewers(self, paper_id: Any, reviewer_ids: list[int]) -> None:
        self._request(
            "POST",
            "/remind-invited-reviewers",
            json={"paperId": paper_id, "reviewerIds": reviewer_ids},
            default_error="Failed to send reminders to pending-invitation reviewers.",
            expect_json=False,
        )

    def assign_reviewers(self, paper_id: Any, reviewer_ids: list[int], order: list[int]) -> Paper:
        body = self._request(
            "POST",
            "/assign-reviewers",
            json={"paperId": paper_id, "reviewerIds": reviewer_ids, "order": order},
            default_error="Failed to assign reviewers.",
        )
        return self._paper_from(body)


class _LazyPortalClient:
    """
    延迟初始化，避免 import 时就读取环境变量/建立连接池。
    """

    def __init__(self, factory: Callable[[], PortalClient]):
        self._factory = factory
        self._client: Optional[PortalClient] = None

    def _get(self) -> PortalClient:
        if self._client is None:
            self._client = self._factory()
        return self._client

    def __getattr__(self, item: str) -> Any:
        return getattr(self._get(), item)


portal: PortalClient = _LazyPortalClient(PortalClient)  # type: ignore[assignment]
