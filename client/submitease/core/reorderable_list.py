from __future__ import annotations

import logging
from typing import Any, Generic, Iterable, Iterator, Optional, Sequence, TypeVar

from submitease.core.errors import DuplicateEntityError, IndexOutOfRangeError
from submitease.core.order_reconciler import entity_id, reconcile

logger = logging.getLogger("submitease.ordering")

E = TypeVar("E")


class ReorderableList(Generic[E]):
    """
    可编辑、可拖拽排序的作者/审稿人工作列表。

    中文注释:
    - 按 id 去重：重复 add 默认忽略（返回 False），strict=True 时抛 DuplicateEntityError。
    - move 为 splice 语义（先删后插），不是交换。
    - “至少保留一位作者”等业务规则由调用方的 policy 负责，这里不做最小数量限制。
    - 负索引视为越界（与页面拖拽事件的索引一致，不走 Python 的倒序索引）。
    """

    def __init__(self, items: Optional[Iterable[E]] = None):
        self._items: list[E] = []
        for item in items or []:
            self.add(item)

    @classmethod
    def from_reconciled(
        cls, order_vector: Optional[Iterable[Any]], entities: Sequence[E]
    ) -> "ReorderableList[E]":
        return cls(reconcile(order_vector, entities))

    @property
    def items(self) -> list[E]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[E]:
        return iter(list(self._items))

    def __getitem__(self, index: int) -> E:
        self._check_index(index)
        return self._items[index]

    def __repr__(self) -> str:
        return f"ReorderableList({self.to_order_vector()!r})"

    def _check_index(self, index: int) -> None:
        if not isinstance(index, int) or index < 0 or index >= len(self._items):
            raise IndexOutOfRangeError(index, len(self._items))

    def index_of(self, eid: Any) -> Optional[int]:
        for idx, item in enumerate(self._items):
            if entity_id(item) == eid:
                return idx
        return None

    def contains(self, eid: Any) -> bool:
        return self.index_of(eid) is not None

    def add(self, entity: E, *, strict: bool = False) -> bool:
        eid = entity_id(entity)
        if self.contains(eid):
            if strict:
                raise DuplicateEntityError(eid)
            logger.debug("[ReorderableList] duplicate add ignored: %s", eid)
            return False
        self._items.append(entity)
        return True

    def remove_at(self, index: int) -> E:
        self._check_index(index)
        return self._items.pop(index)

    def move(self, from_index: int, to_index: int) -> None:
        self._check_index(from_index)
        self._check_index(to_index)
        if from_index == to_index:
            return
        moved = self._items.pop(from_index)
        self._items.insert(to_index, moved)

    def to_order_vector(self) -> list[Any]:
        return [entity_id(item) for item in self._items]
