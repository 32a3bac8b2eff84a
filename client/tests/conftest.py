import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from submitease.models.paper import Paper  # noqa: E402
from submitease.models.participant import Participant  # noqa: E402

# === 全局测试数据 ===
# 中文注释: 门户返回的是大写开头的字段（Title/Authors/AuthorOrder），这里保持同样形状。


def make_user(user_id: int, first: str = "User", last: str | None = None, **extra) -> Participant:
    return Participant(
        id=user_id,
        firstname=first,
        lastname=last or str(user_id),
        email=f"user{user_id}@example.com",
        **extra,
    )


def paper_payload(**overrides) -> dict:
    data = {
        "id": 42,
        "Title": "Ordering in Distributed Review",
        "Abstract": "abstract",
        "Keywords": ["review", "ordering"],
        "Status": "Pending Submission",
        "AuthorOrder": [3, 1],
        "Authors": [
            {"id": 1, "firstname": "Ada", "lastname": "Lovelace", "email": "ada@example.com"},
            {"id": 2, "firstname": "Alan", "lastname": "Turing", "email": "alan@example.com"},
            {"id": 3, "firstname": "Grace", "lastname": "Hopper", "email": "grace@example.com"},
        ],
        "Reviews": [],
        "Conference": {"id": 7, "Tracks": []},
    }
    data.update(overrides)
    return data


@pytest.fixture
def directory():
    return [make_user(i) for i in range(1, 8)]


@pytest.fixture
def pending_paper():
    return Paper.model_validate(paper_payload())


@pytest.fixture
def locked_paper():
    return Paper.model_validate(paper_payload(Status="Under Review"))


@pytest.fixture
def user_factory():
    return make_user


@pytest.fixture
def paper_factory():
    def _factory(**overrides) -> Paper:
        return Paper.model_validate(paper_payload(**overrides))

    return _factory


@pytest.fixture
def paper_json():
    return paper_payload
