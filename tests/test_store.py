from datetime import datetime

import pytest
from sqlalchemy.exc import OperationalError

from blog.core.exceptions import ConstraintError, UnavailableError
from blog.crud.post import PostStore
from blog.db.models.post import Post


def test_insert_returns_materialized_row(db):
    store = PostStore(db)

    post = store.insert("hello", "bob", "images/avatars/a.png", "images/thumbnails/a.png")

    assert isinstance(post.id, int)
    assert post.content == "hello"
    assert post.user == "bob"
    assert post.avatar_url == "images/avatars/a.png"
    assert post.thumbnail_url == "images/thumbnails/a.png"
    assert isinstance(post.created_at, datetime)


def test_image_paths_are_optional(db):
    post = PostStore(db).insert("hello", "bob")

    assert post.avatar_url is None
    assert post.thumbnail_url is None


def test_ids_are_increasing(db):
    store = PostStore(db)
    ids = [store.insert(f"post {i}", "bob").id for i in range(3)]

    assert ids == sorted(ids)
    assert len(set(ids)) == 3


@pytest.mark.parametrize("content, user", [(None, "bob"), ("hello", None)])
def test_missing_required_column_is_a_constraint_error(db, content, user):
    store = PostStore(db)

    with pytest.raises(ConstraintError):
        store.insert(content, user)

    assert store.list_all() == []


def test_list_all_orders_by_created_at_descending(db):
    # Inserted out of time order so the id cannot explain the result
    for content, created_at in [
        ("second", datetime(2024, 1, 1, 12, 0, 2)),
        ("first", datetime(2024, 1, 1, 12, 0, 1)),
        ("third", datetime(2024, 1, 1, 12, 0, 3)),
    ]:
        db.add(Post(content=content, user="bob", created_at=created_at))
    db.commit()

    posts = PostStore(db).list_all()

    assert [p.content for p in posts] == ["third", "second", "first"]


def test_same_timestamp_falls_back_to_newest_id(db):
    store = PostStore(db)
    for i in range(3):
        store.insert(f"post {i}", "bob")

    assert [p.content for p in store.list_all()] == ["post 2", "post 1", "post 0"]


def test_list_all_on_empty_table(db):
    assert PostStore(db).list_all() == []


def test_engine_failure_is_unavailable(db, monkeypatch):
    def broken_commit():
        raise OperationalError("commit", {}, Exception("database is locked"))

    monkeypatch.setattr(db, "commit", broken_commit)

    with pytest.raises(UnavailableError):
        PostStore(db).insert("hello", "bob")
