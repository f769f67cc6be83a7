"""
Tests for classroom listings and roster changes.
"""

from datetime import date
import pytest

from edconnect_backend.api.exceptions import ConflictException, ForbiddenException, NotFoundException
from edconnect_backend.interface.students import UpdateStudentPayload
from edconnect_backend.model.academics import Invoice, Report
from edconnect_backend.model.auth import User
from edconnect_backend.model.enums import UserRole
from edconnect_backend.model.school import Student
from edconnect_backend.repositories.base import ConstraintViolationError
from edconnect_backend.services import roster
from edconnect_backend.tests.fixtures import new_student_payload


class TestListings:

    def test_list_classes_carries_role_labels(self, school, lan):
        classes = roster.list_classes(lan, school)
        assert [(c.name, c.teacher_role) for c in classes] == [
            ("Lớp 1A", "Chủ nhiệm, GV môn Toán"),
            ("Lớp 2B", "GV môn Tiếng Anh"),
        ]

    def test_list_classes_rejects_parents(self, school, binh):
        with pytest.raises(ForbiddenException):
            roster.list_classes(binh, school)

    def test_list_students_of_class(self, school, mai):
        students = roster.list_students_of_class(mai, "lop_1a", school)
        assert {s.id for s in students} == {"hs_an", "hs_duc"}

    def test_list_students_of_foreign_class(self, school, mai):
        with pytest.raises(ForbiddenException):
            roster.list_students_of_class(mai, "lop_2b", school)
        with pytest.raises(NotFoundException):
            roster.list_students_of_class(mai, "missing", school)

    def test_list_children(self, school, hoa):
        assert [s.id for s in roster.list_children(hoa, school)] == ["hs_duc"]

    def test_parent_gets_own_child(self, school, binh):
        student = roster.get_student(binh, "hs_chi", school)
        assert (student.name, student.classroom_id) == ("Đỗ Thu Chi", "lop_2b")

    def test_parent_cannot_get_other_child(self, school, hoa):
        with pytest.raises(ForbiddenException):
            roster.get_student(hoa, "hs_an", school)

    def test_get_missing_student(self, school, hoa):
        with pytest.raises(NotFoundException):
            roster.get_student(hoa, "missing", school)

    def test_teacher_gets_student_of_taught_class(self, school, mai, hung):
        assert roster.get_student(mai, "hs_duc", school).id == "hs_duc"
        with pytest.raises(ForbiddenException):
            roster.get_student(hung, "hs_duc", school)

    def test_admin_cannot_get_student(self, school, admin):
        with pytest.raises(ForbiddenException):
            roster.get_student(admin, "hs_an", school)


class TestAddStudent:

    def test_parent_is_created_once_per_email(self, school, lan):
        parents_before = school.query(User).filter(User.role == UserRole.PARENT).count()

        first = roster.add_student(lan, new_student_payload(student_name="Ngô Gia Bảo"), school)
        second = roster.add_student(lan, new_student_payload(student_name="Ngô Gia Hân", parent_email="NEW@x.com"), school)

        assert first.parent_created is True
        assert second.parent_created is False
        assert first.student.parent_id == second.student.parent_id
        assert school.query(User).filter(User.role == UserRole.PARENT).count() == parents_before + 1

        parent = school.get(User, first.student.parent_id)
        assert parent.email == "new@x.com"
        assert parent.role is UserRole.PARENT

    def test_existing_parent_is_reused(self, school, lan):
        result = roster.add_student(lan, new_student_payload(parent_email="Hoa.Vu@gmail.com"), school)
        assert result.parent_created is False
        assert result.student.parent_id == "ph_hoa"

    def test_email_of_a_teacher_is_rejected(self, school, lan):
        with pytest.raises(ConflictException):
            roster.add_student(lan, new_student_payload(parent_email="mai.le@thcs-edconnect.edu.vn"), school)
        assert school.query(Student).count() == 3

    def test_only_homeroom_teacher_may_add(self, school, mai):
        with pytest.raises(ForbiddenException):
            roster.add_student(mai, new_student_payload(), school)
        assert school.query(User).filter(User.email == "new@x.com").first() is None

    def test_missing_class_is_a_conflict(self, school, lan):
        with pytest.raises(ConflictException):
            roster.add_student(lan, new_student_payload(class_id="missing"), school)

    def test_failed_student_insert_leaves_no_parent(self, school, lan, monkeypatch):
        def failing_create(self, entity):
            raise ConstraintViolationError("student insert failed")

        monkeypatch.setattr(roster.StudentRepository, "create", failing_create)

        with pytest.raises(ConflictException):
            roster.add_student(lan, new_student_payload(), school)
        assert school.query(User).filter(User.email == "new@x.com").first() is None

    def test_student_references_hold(self, school, lan):
        roster.add_student(lan, new_student_payload(), school)
        for student in school.query(Student).all():
            assert student.parent.role is UserRole.PARENT
            assert student.classroom is not None


class TestUpdateAndDelete:

    def test_update_student(self, school, lan):
        payload = UpdateStudentPayload(name="Vũ Anh Đức Minh", date_of_birth=date(2018, 6, 6), gender="Nam")
        result = roster.update_student(lan, "hs_duc", payload, school)
        assert result.name == "Vũ Anh Đức Minh"
        assert school.get(Student, "hs_duc").date_of_birth == date(2018, 6, 6)

    def test_subject_teacher_cannot_update(self, school, lan):
        payload = UpdateStudentPayload(name="Đỗ Thu Chi", date_of_birth=date(2017, 9, 30), gender="Nữ")
        with pytest.raises(ForbiddenException):
            roster.update_student(lan, "hs_chi", payload, school)

    def test_delete_student_removes_records(self, school, lan):
        roster.delete_student(lan, "hs_an", school)

        assert school.get(Student, "hs_an") is None
        assert school.query(Report).filter(Report.student_id == "hs_an").count() == 0
        assert school.query(Invoice).filter(Invoice.student_id == "hs_an").count() == 0

    def test_delete_missing_student(self, school, lan):
        with pytest.raises(NotFoundException):
            roster.delete_student(lan, "missing", school)

    def test_delete_by_other_teacher(self, school, hung):
        with pytest.raises(ForbiddenException):
            roster.delete_student(hung, "hs_an", school)
        assert school.get(Student, "hs_an") is not None
