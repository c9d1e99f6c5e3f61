"""
Tests for UserService against a temporary database.
"""

import pytest

from users_api.app.core.errors import UserNotFoundError
from users_api.app.schemas.user import UserCreate, UserUpdate
from users_api.app.services.user_service import UserService


@pytest.fixture
def service(database) -> UserService:
    return UserService(database)


@pytest.fixture
def jane(service) -> dict:
    return service.create_user(UserCreate(email="jane@example.com", password="longenough", name="Jane"))


class TestUserService:

    def test_create_returns_sanitized_row(self, jane):
        assert jane == {"id": jane["id"], "email": "jane@example.com", "name": "Jane"}

    def test_list_users(self, service, jane):
        assert service.list_users() == [jane]

    def test_get_unknown_user(self, service):
        with pytest.raises(UserNotFoundError) as exc_info:
            service.get_user(42)

        assert exc_info.value.user_id == 42

    def test_update_applies_supplied_fields(self, service, jane, stored_row):
        updated = service.update_user(jane["id"], UserUpdate(name="NewName"))

        assert updated["name"] == "NewName"
        assert stored_row(jane["id"])["password"] == "longenough"

    def test_update_without_changes_rereads(self, service, jane):
        assert service.update_user(jane["id"], UserUpdate()) == jane

    def test_update_unknown_user(self, service):
        with pytest.raises(UserNotFoundError):
            service.update_user(42, UserUpdate(name="NewName"))
