"""
목적: 구조 바인더의 부분 갱신, 재귀 바인딩, 오류 처리 규칙을 검증한다.
설명: 선언된 필드만 갱신되는지, 중첩/시퀀스 바인딩과 실패 시 상태(비트랜잭션/트랜잭션)를 확인한다.
디자인 패턴: 테스트 케이스
참조: src/search_index/projection/binder.py, src/search_index/projection/serializer.py
"""

from __future__ import annotations

import weakref
from dataclasses import dataclass
from typing import List, Optional

import pytest
from pydantic import BaseModel, ConfigDict, Field

from search_index.projection import (
    InvalidTarget,
    ShapeMismatch,
    StructuralBinder,
    UnsupportedType,
    bind,
    from_raw,
    tagged,
    to_field_map,
)
from search_index.shared.logging import InMemoryLogger, LogLevel


@dataclass
class Pair:
    a: int = tagged("a", default=0)
    b: str = tagged("b", default="")


@dataclass
class Leaf:
    value: str = tagged("value", default="")
    weight: float = tagged("weight", default=0.0)


@dataclass
class Branch:
    name: str = tagged("name", default="")
    leaf: Optional[Leaf] = tagged("leaf", default=None)


@dataclass
class Root:
    id: int = tagged("id", default=0)
    branch: Branch = tagged("branch", default_factory=Branch)


@dataclass
class Comment:
    author: str = tagged("author", default="")
    likes: int = tagged("likes", default=0)


@dataclass
class Post:
    title: str = tagged("title", default="")
    rank: int = tagged("rank", default=0)
    comments: List[Comment] = tagged("comments", default_factory=list)
    labels: List[str] = tagged("labels", default_factory=list)
    draft: bool = tagged("draft", default=False)
    note: str = ""


@dataclass
class Thread:
    title: str = tagged("title", default="")
    rank: int = tagged("rank", default=0)
    comments: List[Comment] = tagged("comments", default_factory=list)


@dataclass(frozen=True)
class FrozenPair:
    a: int = tagged("a", default=0)


@dataclass
class Required:
    value: str = tagged("value")


@dataclass
class Holder:
    required: Optional[Required] = tagged("required", default=None)
    frozen: FrozenPair = tagged("frozen", default_factory=FrozenPair)


class ModelComment(BaseModel):
    author: str = Field(default="", alias="author")
    likes: int = Field(default=0, json_schema_extra={"tag": "likes"})


class ModelPost(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(default="", alias="title")
    top: Optional[ModelComment] = Field(default=None, alias="top")
    comments: List[ModelComment] = Field(default_factory=list, alias="comments")


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(default="", alias="name")


def test_partial_update_sets_only_given_fields() -> None:
    pair = Pair(a=1, b="keep")

    bind(pair, {"a": 5})

    assert pair == Pair(a=5, b="keep")


def test_unknown_tag_is_ignored() -> None:
    pair = Pair(a=1, b="keep")

    returned = bind(pair, {"unknown": 1, "note": "x"})

    assert returned is pair
    assert pair == Pair(a=1, b="keep")


def test_untagged_attribute_is_not_addressable() -> None:
    post = Post(note="original")

    bind(post, {"note": "changed", "title": "t"})

    assert post.note == "original"
    assert post.title == "t"


def test_three_level_nesting() -> None:
    """3단계 중첩 매핑이 3단계 중첩 구조에 채워지는지 확인한다."""

    root = Root()
    existing_branch = root.branch

    bind(root, {"id": 1, "branch": {"name": "main", "leaf": {"value": "v", "weight": 0.5}}})

    assert root.id == 1
    assert root.branch is existing_branch
    assert root.branch.name == "main"
    assert root.branch.leaf == Leaf(value="v", weight=0.5)


def test_nested_partial_update_keeps_siblings() -> None:
    root = Root(branch=Branch(name="main", leaf=Leaf(value="v", weight=0.5)))

    bind(root, {"branch": {"leaf": {"weight": 1.5}}})

    assert root.branch.name == "main"
    assert root.branch.leaf == Leaf(value="v", weight=1.5)


def test_sequence_replaces_container_atomically() -> None:
    previous = [Comment(author="old", likes=9)]
    post = Post(comments=previous)

    bind(post, {"comments": [{"author": "kim", "likes": 1}, {"author": "lee"}]})

    assert post.comments is not previous
    assert previous == [Comment(author="old", likes=9)]
    assert post.comments == [Comment(author="kim", likes=1), Comment(author="lee", likes=0)]


def test_empty_sequence_replaces_with_empty_container() -> None:
    post = Post(comments=[Comment(author="old")])

    bind(post, {"comments": []})

    assert post.comments == []


def test_sequence_of_scalars_is_shape_mismatch() -> None:
    """구조 시퀀스 필드에 스칼라 목록을 주면 ShapeMismatch 이며 필드는 그대로다."""

    previous = [Comment(author="old")]
    post = Post(comments=previous)

    with pytest.raises(ShapeMismatch) as exc_info:
        bind(post, {"comments": [1, 2, 3]})

    assert exc_info.value.path == "comments[0]"
    assert post.comments is previous


def test_mixed_sequence_fails_before_assigning() -> None:
    post = Post()

    with pytest.raises(ShapeMismatch) as exc_info:
        bind(post, {"comments": [{"author": "kim"}, "oops"]})

    assert exc_info.value.path == "comments[1]"
    assert post.comments == []


def test_scalar_kind_mismatch_keeps_prior_value() -> None:
    pair = Pair(a=3)

    with pytest.raises(UnsupportedType) as exc_info:
        bind(pair, {"a": "text"})

    assert pair.a == 3
    assert exc_info.value.value == "text"
    assert exc_info.value.path == "a"


@pytest.mark.parametrize(
    ("fields", "error_type", "path"),
    [
        ({"rank": 1.5}, UnsupportedType, "rank"),
        ({"rank": True}, UnsupportedType, "rank"),
        ({"title": 7}, UnsupportedType, "title"),
        ({"title": None}, UnsupportedType, "title"),
        ({"draft": True}, UnsupportedType, "draft"),
        ({"labels": ["a", "b"]}, UnsupportedType, "labels"),
        ({"title": {"nested": 1}}, ShapeMismatch, "title"),
        ({"title": ["a"]}, ShapeMismatch, "title"),
        ({"comments": "text"}, ShapeMismatch, "comments"),
        ({"comments": {"author": "kim"}}, ShapeMismatch, "comments"),
        ({"comments": [{"likes": "many"}]}, UnsupportedType, "comments[0].likes"),
    ],
)
def test_error_classification(fields, error_type, path: str) -> None:
    with pytest.raises(error_type) as exc_info:
        bind(Post(), fields)

    assert exc_info.value.path == path


def test_nested_error_path() -> None:
    with pytest.raises(UnsupportedType) as exc_info:
        bind(Root(), {"branch": {"leaf": {"weight": "heavy"}}})

    assert exc_info.value.path == "branch.leaf.weight"


def test_non_transactional_keeps_earlier_assignments() -> None:
    """기본 바인더는 실패 전에 처리된 필드의 새 값을 유지한다."""

    post = Post(title="before", rank=1)

    with pytest.raises(UnsupportedType):
        bind(post, {"title": "after", "rank": "bad"})

    assert post.title == "after"
    assert post.rank == 1


def test_transactional_rolls_back_and_logs() -> None:
    logger = InMemoryLogger(name="binder-test", emit_stdout=False)
    binder = StructuralBinder(transactional=True, logger=logger)
    previous = [Comment(author="old")]
    root = Root(id=1, branch=Branch(name="main"))
    post = Post(title="before", rank=1, comments=previous)

    with pytest.raises(UnsupportedType):
        binder.bind(post, {"title": "after", "comments": [{"author": "new"}], "rank": "bad"})
    with pytest.raises(UnsupportedType):
        binder.bind(root, {"id": 2, "branch": {"name": "dev", "leaf": {"value": 1}}})

    assert binder.transactional is True
    assert post.title == "before"
    assert post.comments is previous
    assert root.id == 1
    assert root.branch.name == "main"
    assert root.branch.leaf is None
    records = logger.repository.list()
    assert [record.level for record in records] == [LogLevel.WARNING, LogLevel.WARNING]
    assert records[0].metadata["code"] == "PROJECTION_UNSUPPORTED_TYPE"
    assert records[0].metadata["restored"] == 2
    assert records[1].metadata["path"] == "branch.leaf.value"


def test_transactional_success_commits() -> None:
    post = Post()

    StructuralBinder(transactional=True).bind(post, {"title": "t", "comments": [{"likes": 2}]})

    assert post.title == "t"
    assert post.comments == [Comment(likes=2)]


def test_round_trip_through_field_map() -> None:
    """직렬화한 필드 맵을 새 인스턴스에 바인딩하면 원본과 같아진다."""

    original = Root(id=7, branch=Branch(name="b", leaf=Leaf(value="x", weight=2.5)))
    thread = Thread(title="t", rank=3, comments=[Comment(author="a", likes=1), Comment()])

    restored_root = bind(Root(), to_field_map(original))
    restored_thread = bind(Thread(), to_field_map(thread))

    assert restored_root == original
    assert restored_thread == thread


def test_accepts_classified_mapping() -> None:
    pair = Pair()

    bind(pair, from_raw({"a": 2, "b": "x"}))

    assert pair == Pair(a=2, b="x")


def test_fields_must_be_mapping() -> None:
    with pytest.raises(ShapeMismatch):
        bind(Pair(), [1, 2])


def test_pydantic_target() -> None:
    post = ModelPost(title="before")

    bind(post, {"top": {"author": "kim", "likes": 3}, "comments": [{"author": "lee"}]})

    assert post.title == "before"
    assert post.top is not None
    assert (post.top.author, post.top.likes) == ("kim", 3)
    assert [comment.author for comment in post.comments] == ["lee"]
    assert to_field_map(post) == {
        "title": "before",
        "top": {"author": "kim", "likes": 3},
        "comments": [{"author": "lee", "likes": 0}],
    }


def test_weakref_target_is_dereferenced() -> None:
    pair = Pair()
    ref = weakref.ref(pair)

    returned = bind(ref, {"a": 4})

    assert returned is pair
    assert pair.a == 4


def test_dead_weakref_is_invalid_target() -> None:
    pair = Pair()
    ref = weakref.ref(pair)
    del pair

    with pytest.raises(InvalidTarget):
        bind(ref, {"a": 4})


@pytest.mark.parametrize("target", [None, Pair, 5, "text", (1, 2)])
def test_invalid_targets(target) -> None:
    with pytest.raises(InvalidTarget):
        bind(target, {"a": 1})


def test_non_structural_instance_is_shape_mismatch() -> None:
    with pytest.raises(ShapeMismatch):
        bind({"a": 0}, {"a": 1})


def test_frozen_targets_are_invalid() -> None:
    with pytest.raises(InvalidTarget):
        bind(FrozenPair(), {"a": 1})
    with pytest.raises(InvalidTarget):
        bind(FrozenModel(), {"name": "x"})
    with pytest.raises(InvalidTarget) as exc_info:
        bind(Holder(), {"frozen": {"a": 1}})

    assert exc_info.value.path == "frozen"


def test_nested_type_without_defaults_is_invalid_target() -> None:
    holder = Holder()

    with pytest.raises(InvalidTarget) as exc_info:
        bind(holder, {"required": {"value": "x"}})

    assert exc_info.value.path == "required"
    assert holder.required is None


def test_allocate_builds_empty_instances() -> None:
    binder = StructuralBinder()

    assert binder.allocate(Pair) == Pair()
    assert binder.allocate(ModelComment).likes == 0
    with pytest.raises(InvalidTarget):
        binder.allocate(Required)
