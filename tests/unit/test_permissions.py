from types import SimpleNamespace

from bizcrm.api.permissions import (
    can_change_task_status,
    can_edit_task,
    can_patch_task,
    is_admin,
    is_comment_author,
)


def _task(creator=1, responsible=2):
    return SimpleNamespace(creator_manager_id=creator, responsible_manager_id=responsible)


def _user(uid, role="manager"):
    return {"id": uid, "role": role}


def test_is_admin():
    assert is_admin(_user(1, "admin"))
    assert not is_admin(_user(1, "head"))
    assert not is_admin(None)


def test_only_creator_or_admin_edits_task():
    task = _task()
    assert can_edit_task(task, _user(1))
    assert not can_edit_task(task, _user(2))
    assert can_edit_task(task, _user(99, "admin"))
    assert not can_edit_task(None, _user(1))


def test_task_without_creator_is_editable():
    orphan = _task(creator=None)
    assert can_edit_task(orphan, _user(2))
    assert can_edit_task(orphan, _user(7))
    assert not can_edit_task(orphan, None)


def test_creator_and_assignee_patch_task():
    task = _task()
    assert can_patch_task(task, _user(1))
    assert can_patch_task(task, _user(2))
    assert not can_patch_task(task, _user(3))
    assert not can_patch_task(task, _user(3, "head"))
    assert can_change_task_status(task, _user(2))
    assert not can_change_task_status(task, {})


def test_comment_author():
    comment = SimpleNamespace(manager_id=5)
    assert is_comment_author(comment, _user(5))
    assert not is_comment_author(comment, _user(6, "admin"))
