import pytest

from bizcrm.utils.roles import (
    MANAGE_ROLES,
    VISIBILITY_ALL,
    VISIBILITY_HIERARCHY,
    VISIBILITY_OWN,
    RoleEnum,
    get_role_visibility,
    role_sees_everything,
)


def test_each_role_maps_to_its_visibility():
    assert get_role_visibility("admin") == VISIBILITY_ALL
    assert get_role_visibility("head") == VISIBILITY_HIERARCHY
    assert get_role_visibility("manager") == VISIBILITY_OWN


def test_unknown_role_rejected():
    with pytest.raises(ValueError):
        get_role_visibility("owner")


def test_every_enum_role_has_a_policy():
    for role in RoleEnum:
        assert get_role_visibility(role.value)


def test_only_admin_manages_and_sees_everything():
    assert MANAGE_ROLES == {"admin"}
    assert role_sees_everything("admin")
    assert not role_sees_everything("manager")
    assert not role_sees_everything(None)
