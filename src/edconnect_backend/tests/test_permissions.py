"""
Tests for the access policy: role rows, per-resource conditions and the
order in which missing targets and denials are reported.
"""

import pytest

from edconnect_backend.api.exceptions import ConflictException, ForbiddenException, NotFoundException
from edconnect_backend.model.enums import UserRole
from edconnect_backend.permissions import Action, Allow, Deny, authorize, permission_registry, require_permission, visible_records
from edconnect_backend.permissions.relationships import RelationshipResolver
from edconnect_backend.tests.fixtures import make_principal

STUDENTS = ["hs_an", "hs_chi", "hs_duc"]


def test_every_action_has_a_handler():
    assert permission_registry.unregistered_actions() == []


def test_missing_principal_is_denied(school):
    assert isinstance(authorize(None, Action.VIEW_CONTACTS, None, school), Deny)


class TestRoleRows:

    @pytest.mark.parametrize("action", [
        Action.VIEW_CONTACTS,
        Action.VIEW_ANNOUNCEMENTS,
        Action.VIEW_TIMETABLE,
        Action.SUBMIT_SUPPORT_REQUEST,
    ])
    def test_member_actions(self, school, admin, lan, binh, action):
        assert authorize(lan, action, None, school)
        assert authorize(binh, action, None, school)
        assert not authorize(admin, action, None, school)

    @pytest.mark.parametrize("action", [
        Action.CREATE_ANNOUNCEMENT,
        Action.VIEW_ALL_USERS,
        Action.VIEW_ADMIN_STATS,
        Action.VIEW_SUPPORT_REQUESTS,
    ])
    def test_admin_actions(self, school, admin, lan, binh, action):
        assert isinstance(authorize(admin, action, None, school), Allow)
        assert not authorize(lan, action, None, school)
        assert not authorize(binh, action, None, school)

    def test_classes_owned_is_teacher_only(self, school, lan, binh, admin):
        assert authorize(lan, Action.VIEW_CLASSES_OWNED, None, school)
        assert not authorize(binh, Action.VIEW_CLASSES_OWNED, None, school)
        assert not authorize(admin, Action.VIEW_CLASSES_OWNED, None, school)

    def test_deny_reason(self, school, binh):
        decision = authorize(binh, Action.CREATE_ANNOUNCEMENT, None, school)
        assert decision.allowed is False
        assert decision.reason == "Unauthorized"


class TestConditions:

    def test_send_message_requires_contact(self, school, binh, hoa):
        assert authorize(binh, Action.SEND_MESSAGE, "gv_hung", school)
        assert not authorize(hoa, Action.SEND_MESSAGE, "gv_hung", school)
        assert not authorize(binh, Action.SEND_MESSAGE, "ph_hoa", school)

    def test_view_students_of_class(self, school, lan, mai):
        assert authorize(lan, Action.VIEW_STUDENTS_OF_CLASS, "lop_2b", school)
        assert not authorize(mai, Action.VIEW_STUDENTS_OF_CLASS, "lop_2b", school)

    def test_parent_reads_only_own_childrens_reports(self, school, binh):
        assert authorize(binh, Action.VIEW_REPORTS, "hs_an", school)
        assert not authorize(binh, Action.VIEW_REPORTS, "hs_duc", school)
        assert not authorize(binh, Action.EDIT_REPORT, "hs_an", school)

    def test_teacher_records_follow_class_authorization(self, school, lan, hung, mai):
        assert authorize(lan, Action.EDIT_REPORT, "hs_chi", school)
        assert authorize(mai, Action.VIEW_REPORTS, "hs_duc", school)
        assert not authorize(hung, Action.VIEW_REPORTS, "hs_an", school)

    def test_teacher_records_consult_student_authorization(self, school, lan, monkeypatch):
        calls = []

        def deny(user_id, student_id, db):
            calls.append((user_id, student_id))
            return False

        monkeypatch.setattr(RelationshipResolver, "is_authorized_for_student_records", staticmethod(deny))
        assert not authorize(lan, Action.VIEW_STUDENT, "hs_an", school)
        assert calls == [("gv_lan", "hs_an")]

    def test_invoices_belong_to_the_parent(self, school, binh, hoa, lan, admin):
        assert authorize(binh, Action.VIEW_INVOICES, "hs_an", school)
        assert authorize(binh, Action.PAY_INVOICE, "hd_an_09", school)
        assert not authorize(hoa, Action.PAY_INVOICE, "hd_an_09", school)
        assert not authorize(lan, Action.PAY_INVOICE, "hd_an_09", school)
        assert not authorize(admin, Action.PAY_INVOICE, "hd_an_09", school)

    def test_roster_changes_need_homeroom(self, school, lan, mai):
        assert authorize(lan, Action.ADD_STUDENT, "lop_1a", school)
        assert authorize(lan, Action.EDIT_STUDENT, "hs_duc", school)
        assert not authorize(lan, Action.DELETE_STUDENT, "hs_chi", school)
        assert not authorize(mai, Action.ADD_STUDENT, "lop_1a", school)

    @pytest.mark.parametrize("teacher_id", ["gv_lan", "gv_hung", "gv_mai"])
    def test_roster_actions_share_one_check(self, school, teacher_id):
        teacher = make_principal(teacher_id, UserRole.TEACHER)
        for student_id in STUDENTS:
            classroom_id = {"hs_an": "lop_1a", "hs_chi": "lop_2b", "hs_duc": "lop_1a"}[student_id]
            edit = bool(authorize(teacher, Action.EDIT_STUDENT, student_id, school))
            delete = bool(authorize(teacher, Action.DELETE_STUDENT, student_id, school))
            add = bool(authorize(teacher, Action.ADD_STUDENT, classroom_id, school))
            assert edit == delete == add


class TestMissingTargets:

    def test_missing_student_is_not_found(self, school, binh, lan):
        with pytest.raises(NotFoundException):
            authorize(binh, Action.VIEW_REPORTS, "missing", school)
        with pytest.raises(NotFoundException):
            authorize(lan, Action.EDIT_STUDENT, "missing", school)

    def test_existing_student_of_another_parent_is_denied(self, school, hoa):
        with pytest.raises(ForbiddenException) as e:
            require_permission(hoa, Action.VIEW_REPORTS, "hs_an", school)
        assert e.value.status_code == 403
        assert e.value.detail == {"action": "view_reports", "reason": "Unauthorized"}

    def test_role_is_checked_before_lookup(self, school, lan, admin):
        assert not authorize(lan, Action.VIEW_INVOICES, "missing", school)
        assert not authorize(lan, Action.UPDATE_SUPPORT_REQUEST, "missing", school)
        with pytest.raises(NotFoundException):
            authorize(admin, Action.UPDATE_SUPPORT_REQUEST, "missing", school)

    def test_missing_invoice_is_not_found(self, school, binh):
        with pytest.raises(NotFoundException):
            authorize(binh, Action.PAY_INVOICE, "missing", school)

    def test_add_student_to_missing_class_is_a_conflict(self, school, lan):
        with pytest.raises(ConflictException):
            authorize(lan, Action.ADD_STUDENT, "missing", school)


class TestListings:

    def test_listing_requires_role(self, school, binh):
        with pytest.raises(ForbiddenException):
            visible_records(binh, Action.VIEW_CLASSES_OWNED, school)

    def test_non_listing_action_cannot_be_listed(self, school, lan):
        with pytest.raises(ForbiddenException):
            visible_records(lan, Action.VIEW_STUDENTS_OF_CLASS, school)

    def test_children_listing(self, school, binh):
        assert [s.id for s in visible_records(binh, Action.VIEW_CHILDREN, school)] == ["hs_an", "hs_chi"]
