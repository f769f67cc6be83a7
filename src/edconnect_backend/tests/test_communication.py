"""
Tests for contacts, direct messages and announcements.
"""

import pytest

from edconnect_backend.api.exceptions import BadRequestException, ForbiddenException, NotFoundException
from edconnect_backend.model.message import Announcement, Message
from edconnect_backend.services import communication
from edconnect_backend.settings import settings


class TestContacts:

    def test_parent_contacts(self, school, binh):
        contacts = communication.list_contacts(binh, school)
        assert [c.display_name for c in contacts] == ["Lê Thị Mai", "Nguyễn Thị Lan", "Trần Văn Hùng"]

    def test_teacher_contacts(self, school, hung):
        assert [c.id for c in communication.list_contacts(hung, school)] == ["ph_binh"]

    def test_admin_has_no_contact_listing(self, school, admin):
        with pytest.raises(ForbiddenException):
            communication.list_contacts(admin, school)


class TestMessages:

    def test_send_and_read_conversation(self, school, binh, lan):
        communication.send_message(binh, "gv_lan", "Chào cô, cháu An hôm nay xin nghỉ ốm.", school)
        communication.send_message(lan, "ph_binh", "  Cô đã nhận được tin.  ", school)
        communication.send_message(binh, "gv_mai", "Chào cô Mai.", school)

        conversation = communication.get_conversation(binh, "gv_lan", school)
        assert len(conversation) == 2
        assert {m.sender_id for m in conversation} == {"ph_binh", "gv_lan"}
        assert conversation[0].timestamp <= conversation[1].timestamp
        assert "Cô đã nhận được tin." in [m.content for m in conversation]

        assert [m.content for m in communication.get_conversation(lan, "ph_binh", school)] == [m.content for m in conversation]

    def test_receiver_must_be_a_contact(self, school, hoa):
        with pytest.raises(ForbiddenException):
            communication.send_message(hoa, "gv_hung", "Xin chào thầy.", school)
        assert school.query(Message).count() == 0

    def test_missing_receiver(self, school, binh):
        with pytest.raises(NotFoundException):
            communication.send_message(binh, "missing", "Xin chào.", school)

    def test_blank_message_is_rejected(self, school, binh):
        with pytest.raises(BadRequestException):
            communication.send_message(binh, "gv_lan", "   ", school)

    def test_conversation_with_non_contact(self, school, hoa):
        with pytest.raises(ForbiddenException):
            communication.get_conversation(hoa, "gv_hung", school)


class TestAnnouncements:

    def test_members_read_announcements(self, school, lan, binh):
        assert [a.id for a in communication.list_announcements(lan, school)] == ["tb_khai_giang"]
        assert [a.id for a in communication.list_announcements(binh, school)] == ["tb_khai_giang"]

    def test_admin_publishes_latest_first(self, school, admin, binh):
        created = communication.create_announcement(admin, "Họp phụ huynh vào thứ Bảy.", school)
        assert created.school_id == settings.SCHOOL_ID

        announcements = communication.list_announcements(binh, school)
        assert [a.id for a in announcements] == [created.id, "tb_khai_giang"]

    def test_other_schools_are_hidden(self, school, lan):
        school.add(Announcement(id="tb_other", content="Thông báo trường khác", school_id="TH99"))
        school.commit()
        assert "tb_other" not in [a.id for a in communication.list_announcements(lan, school)]

    def test_teacher_cannot_publish(self, school, lan):
        with pytest.raises(ForbiddenException):
            communication.create_announcement(lan, "Thông báo", school)
