import os
from dataclasses import dataclass

from dotenv import load_dotenv


def _env_bool(key: str, default: bool) -> bool:
    raw = os.environ.get(key)
    if raw is None:
        return default
    lowered = raw.strip().lower()
    return lowered in {"1", "true", "yes", "y", "on"}


def _env_float(key: str, default: float) -> float:
    raw = (os.environ.get(key) or "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


@dataclass(frozen=True)
class PortalConfig:
    """
    Portal client config

    中文注释:
    1) base_url 指向论文门户后端（默认本地 3001 端口）。
    2) strict_add=True 时，重复添加作者/审稿人会直接抛错；默认静默忽略（与页面行为一致）。
    """

    env: str
    base_url: str
    timeout: float
    strict_add: bool

    @staticmethod
    def from_env() -> "PortalConfig":
        # 中文注释: 本地开发允许用 .env 补充；已存在的环境变量优先。
        load_dotenv(override=False)
        env = (os.environ.get("APP_ENV") or "development").strip().lower()
        base_url = (
            os.environ.get("PORTAL_API_BASE_URL") or "http://localhost:3001"
        ).strip().rstrip("/")
        timeout = _env_float("PORTAL_HTTP_TIMEOUT", 10.0)
        strict_add = _env_bool("ORDERING_STRICT_ADD", False)

        return PortalConfig(
            env=env,
            base_url=base_url,
            timeout=timeout,
            strict_add=strict_add,
        )
