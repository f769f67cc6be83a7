"""
Tests for the relationships derived between teachers, classrooms and parents.
"""

import pytest

from edconnect_backend.model.enums import UserRole
from edconnect_backend.model.school import Subject, TeachingAssignment
from edconnect_backend.permissions.relationships import HOMEROOM_LABEL, RelationshipResolver

TEACHERS = ["gv_lan", "gv_hung", "gv_mai"]
PARENTS = ["ph_binh", "ph_hoa"]


class TestClassroomsForTeacher:

    def test_homeroom_label_comes_first(self, school):
        result = RelationshipResolver.classrooms_for_teacher("gv_lan", school)

        assert [(entry.classroom.id, entry.role_label) for entry in result] == [
            ("lop_1a", "Chủ nhiệm, GV môn Toán"),
            ("lop_2b", "GV môn Tiếng Anh"),
        ]
        assert result[0].is_homeroom
        assert not result[1].is_homeroom

    def test_subject_teacher_has_no_homeroom_label(self, school):
        school.add(Subject(id="mon_an", name="Âm nhạc"))
        school.flush()
        school.add(TeachingAssignment(teacher_id="gv_hung", classroom_id="lop_1a", subject_id="mon_an"))
        school.commit()

        hung = {e.classroom.id: e.labels for e in RelationshipResolver.classrooms_for_teacher("gv_hung", school)}
        assert hung["lop_1a"] == ("GV môn Âm nhạc",)
        assert hung["lop_2b"] == (HOMEROOM_LABEL, "GV môn Tiếng Việt")

        lan = {e.classroom.id: e.labels for e in RelationshipResolver.classrooms_for_teacher("gv_lan", school)}
        assert lan["lop_1a"][0] == HOMEROOM_LABEL
        assert "GV môn Âm nhạc" not in lan["lop_1a"]

    def test_teacher_without_classes(self, school):
        assert RelationshipResolver.classrooms_for_teacher("admin01", school) == []
        assert RelationshipResolver.classroom_ids_for_teacher("admin01", school) == set()

    def test_classroom_ids_include_homeroom_and_assignments(self, school):
        assert RelationshipResolver.classroom_ids_for_teacher("gv_lan", school) == {"lop_1a", "lop_2b"}
        assert RelationshipResolver.classroom_ids_for_teacher("gv_mai", school) == {"lop_1a"}


class TestContacts:

    def test_parent_contacts_are_teachers_of_their_children(self, school):
        contacts = RelationshipResolver.contacts_for("ph_binh", UserRole.PARENT, school)
        # ordered by display name
        assert [u.id for u in contacts] == ["gv_mai", "gv_lan", "gv_hung"]

        assert RelationshipResolver.contact_ids_for("ph_hoa", UserRole.PARENT, school) == {"gv_lan", "gv_mai"}

    def test_teacher_contacts_are_parents_of_their_students(self, school):
        assert RelationshipResolver.contact_ids_for("gv_lan", UserRole.TEACHER, school) == {"ph_binh", "ph_hoa"}
        assert RelationshipResolver.contact_ids_for("gv_hung", UserRole.TEACHER, school) == {"ph_binh"}

    def test_admin_has_no_contacts(self, school):
        assert RelationshipResolver.contacts_for("admin01", UserRole.ADMIN, school) == []

    def test_contacts_are_symmetric(self, school):
        for parent_id in PARENTS:
            parent_contacts = RelationshipResolver.contact_ids_for(parent_id, UserRole.PARENT, school)
            for teacher_id in TEACHERS:
                teacher_contacts = RelationshipResolver.contact_ids_for(teacher_id, UserRole.TEACHER, school)
                assert (teacher_id in parent_contacts) == (parent_id in teacher_contacts)


class TestAuthorizationPredicates:

    @pytest.mark.parametrize("teacher_id,classroom_id,expected", [
        ("gv_lan", "lop_1a", True),
        ("gv_lan", "lop_2b", False),
        ("gv_hung", "lop_2b", True),
        ("gv_mai", "lop_1a", False),
        ("gv_lan", "missing", False),
    ])
    def test_is_homeroom_teacher(self, school, teacher_id, classroom_id, expected):
        assert RelationshipResolver.is_homeroom_teacher(teacher_id, classroom_id, school) is expected

    @pytest.mark.parametrize("teacher_id,classroom_id,expected", [
        ("gv_lan", "lop_2b", True),
        ("gv_mai", "lop_1a", True),
        ("gv_mai", "lop_2b", False),
        ("gv_hung", "lop_1a", False),
    ])
    def test_is_authorized_for_class(self, school, teacher_id, classroom_id, expected):
        assert RelationshipResolver.is_authorized_for_class(teacher_id, classroom_id, school) is expected

    def test_is_authorized_for_student_records(self, school):
        assert RelationshipResolver.is_authorized_for_student_records("gv_mai", "hs_an", school)
        assert not RelationshipResolver.is_authorized_for_student_records("gv_mai", "hs_chi", school)
        assert not RelationshipResolver.is_authorized_for_student_records("gv_lan", "missing", school)

    def test_results_follow_store_changes(self, school):
        assert not RelationshipResolver.is_authorized_for_class("gv_hung", "lop_1a", school)
        school.add(TeachingAssignment(teacher_id="gv_hung", classroom_id="lop_1a", subject_id="mon_toan"))
        school.commit()
        assert RelationshipResolver.is_authorized_for_class("gv_hung", "lop_1a", school)
        assert "ph_hoa" in RelationshipResolver.contact_ids_for("gv_hung", UserRole.TEACHER, school)
