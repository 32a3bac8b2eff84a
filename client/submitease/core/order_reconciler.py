"""
Order reconciliation: 把后端保存的顺序向量（AuthorOrder / ReviewerOrder）与最新拉取的实体列表合并。

中文注释:
1. 先按顺序向量输出，再追加未出现在向量中的实体（保持原始拉取顺序）。
2. 向量里找不到实体的 id 视为过期引用，直接跳过，不报错、不插占位。
3. 纯函数：不修改入参。
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Iterable, Optional, Sequence, TypeVar

logger = logging.getLogger("submitease.ordering")

E = TypeVar("E")


def entity_id(entity: Any) -> Any:
    """兼容 dict（门户 JSON）与带 id 属性的对象（pydantic model）。"""
    if isinstance(entity, Mapping):
        return entity.get("id")
    return getattr(entity, "id", None)


def reconcile(order_vector: Optional[Iterable[Any]], entities: Sequence[E]) -> list[E]:
    order = list(order_vector or [])
    if not order or not entities:
        return list(entities)

    lookup: dict[Any, E] = {}
    for entity in entities:
        lookup.setdefault(entity_id(entity), entity)

    result: list[E] = []
    placed: set[Any] = set()
    skipped = 0
    for eid in order:
        if eid in placed:
            continue
        entity = lookup.get(eid)
        if entity is None:
            skipped += 1
            continue
        result.append(entity)
        placed.add(eid)

    ordered_ids = set(order)
    result.extend(e for e in entities if entity_id(e) not in ordered_ids)

    if skipped:
        logger.debug("[OrderReconciler] skipped %s stale id(s) from order vector", skipped)
    return result


def stale_ids(order_vector: Optional[Iterable[Any]], entities: Sequence[Any]) -> list[Any]:
    """返回顺序向量中没有对应实体的 id（例如后端已移除的审稿人）。"""
    known = {entity_id(e) for e in entities}
    return [eid for eid in (order_vector or []) if eid not in known]
