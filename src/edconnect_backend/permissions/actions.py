from enum import Enum


class Action(str, Enum):
    """Every operation the access policy knows how to decide."""

    VIEW_CONTACTS = "view_contacts"
    SEND_MESSAGE = "send_message"
    VIEW_ANNOUNCEMENTS = "view_announcements"
    CREATE_ANNOUNCEMENT = "create_announcement"
    VIEW_CLASSES_OWNED = "view_classes_owned"
    VIEW_STUDENTS_OF_CLASS = "view_students_of_class"
    ADD_STUDENT = "add_student"
    EDIT_STUDENT = "edit_student"
    DELETE_STUDENT = "delete_student"
    VIEW_REPORTS = "view_reports"
    EDIT_REPORT = "edit_report"
    VIEW_INVOICES = "view_invoices"
    PAY_INVOICE = "pay_invoice"
    VIEW_ALL_USERS = "view_all_users"
    VIEW_ADMIN_STATS = "view_admin_stats"
    VIEW_SUPPORT_REQUESTS = "view_support_requests"
    UPDATE_SUPPORT_REQUEST = "update_support_request"
    VIEW_TIMETABLE = "view_timetable"
    VIEW_CHILDREN = "view_children"
    VIEW_STUDENT = "view_student"
    SUBMIT_SUPPORT_REQUEST = "submit_support_request"
