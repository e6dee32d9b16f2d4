"""
Unit tests for role-based authorization.
"""
from types import SimpleNamespace

import pytest

from pizza_service.core.exceptions import Forbidden
from pizza_service.core.permissions import Action, authorize, has_role, require
from pizza_service.models.user import Role


def _caller(user_id, *roles):
    return SimpleNamespace(
        id=user_id,
        roles=[SimpleNamespace(role=role, object_id=object_id) for role, object_id in roles],
    )


ADMIN = _caller(1, ("admin", None))
DINER = _caller(2, ("diner", None))
FRANCHISEE = _caller(3, ("diner", None), ("franchisee", 10))


class TestHasRole:

    def test_unscoped(self):
        assert has_role(FRANCHISEE, Role.FRANCHISEE)
        assert not has_role(DINER, Role.ADMIN)

    def test_scoped_to_object(self):
        assert has_role(FRANCHISEE, Role.FRANCHISEE, object_id=10)
        assert not has_role(FRANCHISEE, Role.FRANCHISEE, object_id=11)


class TestAuthorize:

    @pytest.mark.parametrize("action", list(Action))
    def test_admin_may_do_anything(self, action):
        assert authorize(ADMIN, action, target=99)

    @pytest.mark.parametrize(
        "action",
        [Action.ADD_MENU_ITEM, Action.CREATE_FRANCHISE, Action.DELETE_FRANCHISE, Action.LIST_USERS, Action.DELETE_USER],
    )
    def test_admin_only_actions_deny_others(self, action):
        assert not authorize(DINER, action)
        assert not authorize(FRANCHISEE, action, target=10)

    @pytest.mark.parametrize("action", [Action.CREATE_STORE, Action.DELETE_STORE])
    def test_store_actions_scoped_to_franchise(self, action):
        assert authorize(FRANCHISEE, action, target=10)
        assert not authorize(FRANCHISEE, action, target=11)
        assert not authorize(DINER, action, target=10)

    def test_self_service(self):
        assert authorize(DINER, Action.UPDATE_USER, target=2)
        assert not authorize(DINER, Action.UPDATE_USER, target=3)

    def test_anonymous_denied(self):
        decision = authorize(None, Action.UPDATE_USER, target=2)

        assert not decision
        assert decision.reason == "not authenticated"


class TestRequire:

    def test_allowed_returns_none(self):
        assert require(ADMIN, Action.CREATE_FRANCHISE) is None

    def test_denied_raises_forbidden_with_message(self):
        with pytest.raises(Forbidden) as exc:
            require(DINER, Action.CREATE_STORE, target=10)

        assert exc.value.status_code == 403
        assert exc.value.message == "unable to create a store"
