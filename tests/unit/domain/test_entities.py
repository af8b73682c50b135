"""Unit tests for the User and Group entities."""

import pytest

from core.exceptions import (
    BusinessRuleViolationError,
    ErrorCode,
    InvalidFieldError,
)
from domain.entities.group import Group
from domain.entities.user import User
from domain.value_objects.email import Email
from domain.value_objects.identifiers import GroupID, UserID
from domain.value_objects.role import Role
from tests.unit.conftest import FIXED_TIME, make_group, make_user


class TestUser:
    def test_create_stamps_both_timestamps(self) -> None:
        user = User.create(UserID("u1"), "Alice", Email("alice@example.com"), Role.USER)

        assert user.created_at == user.updated_at
        assert user.group_ids == []

    @pytest.mark.parametrize("name", ["", "   "])
    def test_create_rejects_blank_name(self, name: str) -> None:
        with pytest.raises(InvalidFieldError) as exc_info:
            User.create(UserID("u1"), name, Email("alice@example.com"), Role.USER)

        assert exc_info.value.field == "name"
        assert exc_info.value.error_code == ErrorCode.REQUIRED_FIELD_MISSING

    def test_reconstruct_keeps_stored_timestamps(self) -> None:
        user = make_user(group_ids=["g1", "g2"])

        assert user.created_at == FIXED_TIME
        assert user.updated_at == FIXED_TIME
        assert user.group_ids == [GroupID("g1"), GroupID("g2")]

    def test_join_group_records_membership(self) -> None:
        user = make_user()

        user.join_group(GroupID("g1"))

        assert user.is_member_of(GroupID("g1"))
        assert user.updated_at > FIXED_TIME

    def test_join_group_twice_is_rejected(self) -> None:
        user = make_user(group_ids=["g1"])

        with pytest.raises(BusinessRuleViolationError) as exc_info:
            user.join_group(GroupID("g1"))

        assert exc_info.value.error_code == ErrorCode.DUPLICATE_MEMBER
        assert exc_info.value.rule == "unique_member"
        assert user.updated_at == FIXED_TIME
        assert user.group_ids == [GroupID("g1")]

    def test_leave_group_removes_membership(self) -> None:
        user = make_user(group_ids=["g1", "g2"])

        user.leave_group(GroupID("g1"))

        assert user.group_ids == [GroupID("g2")]

    def test_leave_group_not_joined_is_rejected(self) -> None:
        user = make_user()

        with pytest.raises(BusinessRuleViolationError) as exc_info:
            user.leave_group(GroupID("g1"))

        assert exc_info.value.error_code == ErrorCode.MEMBER_NOT_FOUND
        assert exc_info.value.rule == "member_exists"
        assert user.updated_at == FIXED_TIME

    def test_group_ids_is_a_copy(self) -> None:
        user = make_user(group_ids=["g1"])

        user.group_ids.append(GroupID("g2"))

        assert user.group_ids == [GroupID("g1")]

    def test_update_profile_rejects_blank_name_without_changes(self) -> None:
        user = make_user()

        with pytest.raises(InvalidFieldError):
            user.update_profile(" ", Email("new@example.com"))

        assert user.name == "Alice"
        assert user.email == Email("alice@example.com")
        assert user.updated_at == FIXED_TIME

    def test_change_role(self) -> None:
        user = make_user()

        user.change_role(Role.ADMIN)

        assert user.role is Role.ADMIN
        assert user.updated_at > FIXED_TIME


class TestGroup:
    def test_create_starts_empty(self) -> None:
        group = Group.create(GroupID("g1"), "Engineering", "Builds things")

        assert group.member_ids == []
        assert group.description == "Builds things"

    def test_create_rejects_blank_name(self) -> None:
        with pytest.raises(InvalidFieldError):
            Group.create(GroupID("g1"), "  ")

    def test_add_and_remove_member(self) -> None:
        group = make_group()

        group.add_member(UserID("u1"))
        assert group.has_member(UserID("u1"))

        group.remove_member(UserID("u1"))
        assert not group.has_member(UserID("u1"))

    def test_add_existing_member_is_rejected(self) -> None:
        group = make_group(member_ids=["u1"])

        with pytest.raises(BusinessRuleViolationError) as exc_info:
            group.add_member(UserID("u1"))

        assert exc_info.value.entity == "Group"
        assert group.updated_at == FIXED_TIME

    def test_remove_non_member_is_rejected(self) -> None:
        group = make_group()

        with pytest.raises(BusinessRuleViolationError):
            group.remove_member(UserID("u1"))

    def test_update_info_allows_clearing_description(self) -> None:
        group = make_group(description="old")

        group.update_info("Platform", None)

        assert group.name == "Platform"
        assert group.description is None
        assert group.updated_at > FIXED_TIME
