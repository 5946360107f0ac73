# core/nav_registry.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from core.session_store import Store, is_authenticated

# Page renderer signature: () -> None. Screens shared by several
# portals are curried per segment (login_page("staff"), ...).
PageFn = Callable[[], None]

@dataclass(frozen=True)
class Route:
    key: str                          # stable id, also the url_path
    label: str                        # UI label
    icon: str                         # emoji
    render: PageFn                    # callable that renders the page
    segments: Tuple[str, ...] = ()    # signed-in segments that see it; () = public
    guest_of: Optional[str] = None    # hidden once this segment is signed in
    in_menu: bool = True              # False: reachable by link/redirect only

    def visible_to(self, store: Store) -> bool:
        if not self.in_menu:
            return False
        if self.guest_of and is_authenticated(self.guest_of, store):
            return False
        if not self.segments:
            return True
        return any(is_authenticated(s, store) for s in self.segments)

@dataclass
class Section:
    title: str
    routes: List[Route]

from screens.home import render as home_render
from screens.environment import render as environment_render
from screens.login import login_page
from screens.logout import logout_page
from screens.password_reset import forgot_password_page, reset_password_page
from screens.profile import profile_page, render_staff_dashboard
from screens.school_registration import render as school_registration_render
from screens.staff_registration import render as staff_registration_render
from screens.parents.registration import render as parent_registration_render
from screens.subjects import render as subjects_render
from screens.classes import render as classes_render
from screens.students.page import render as students_render
from screens.staff import render as staff_management_render
from screens.finance.payment_methods import render as payment_methods_render
from screens.finance.fee_payment import render as fee_payment_render, render_fee_information
from screens.marks.input_marks import render as input_marks_render
from screens.marks.view_results import render as view_results_render
from screens.analytics.school_dashboard import render as school_dashboard_render
from screens.analytics.class_analytics import render as class_analytics_render
from screens.analytics.subject_analytics import render as subject_analytics_render
from screens.analytics.student_statistics import render as student_statistics_render
from screens.analytics.statistics_dashboard import render as statistics_dashboard_render
from screens.analytics.reports import render as reports_render
from screens.parents.dashboard import render as parent_dashboard_render
from screens.parents.student_analytics import render as parent_student_analytics_render

SECTIONS: List[Section] = [
    Section("Welcome", [
        Route("home",                    "Home",                "🏠", home_render),
        Route("school_login",            "School Login",        "🏫", login_page("school"), guest_of="school"),
        Route("staff_login",             "Staff Login",         "👩‍🏫", login_page("staff"), guest_of="staff"),
        Route("parent_login",            "Parent Login",        "👪", login_page("parent"), guest_of="parent"),
        Route("school_registration",     "Register School",     "📝", school_registration_render, guest_of="school"),
        Route("staff_registration",      "Staff Registration",  "📝", staff_registration_render, guest_of="staff", in_menu=False),
        Route("parent_registration",     "Parent Registration", "📝", parent_registration_render, guest_of="parent", in_menu=False),
        Route("school_forgot_password",  "Forgot Password",     "🔑", forgot_password_page("school"), in_menu=False),
        Route("staff_forgot_password",   "Forgot Password",     "🔑", forgot_password_page("staff"), in_menu=False),
        Route("parent_forgot_password",  "Forgot Password",     "🔑", forgot_password_page("parent"), in_menu=False),
        Route("school_reset_password",   "Reset Password",      "🔑", reset_password_page("school"), in_menu=False),
        Route("staff_reset_password",    "Reset Password",      "🔑", reset_password_page("staff"), in_menu=False),
        Route("fee_payment",             "Fee Payment",         "💳", fee_payment_render),
        Route("environment",             "Environment",         "🛰️", environment_render),
    ]),
    Section("School", [
        Route("school_dashboard",  "Dashboard",        "📊", school_dashboard_render, ("school",)),
        Route("classes",           "Classes",          "🏫", classes_render, ("school",)),
        Route("staff_management",  "Staff",            "👥", staff_management_render, ("school",)),
        Route("payment_methods",   "Payment Methods",  "💰", payment_methods_render, ("school",)),
        Route("school_profile",    "Profile",          "👤", profile_page("school"), ("school",)),
        Route("school_logout",     "Logout",           "🚪", logout_page("school"), ("school",)),
    ]),
    Section("Records", [
        Route("subjects",  "Subjects",  "📚", subjects_render, ("school", "staff")),
        Route("students",  "Students",  "🎓", students_render, ("school", "staff")),
    ]),
    Section("Staff", [
        Route("staff_dashboard",       "Dashboard",            "🏠", render_staff_dashboard, ("staff",)),
        Route("input_marks",           "Input Marks",          "✍️", input_marks_render, ("staff",)),
        Route("view_results",          "View Results",         "📋", view_results_render, ("staff",)),
        Route("class_analytics",       "Class Analytics",      "📊", class_analytics_render, ("staff",)),
        Route("subject_analytics",     "Subject Analytics",    "📘", subject_analytics_render, ("staff",)),
        Route("student_statistics",    "Student Statistics",   "🧑‍🎓", student_statistics_render, ("staff",)),
        Route("statistics_dashboard",  "Statistics Dashboard", "📈", statistics_dashboard_render, ("staff",)),
        Route("reports",               "Reports",              "📑", reports_render, ("staff",)),
        Route("staff_profile",         "Profile",              "👤", profile_page("staff"), ("staff",)),
        Route("staff_logout",          "Logout",               "🚪", logout_page("staff"), ("staff",)),
    ]),
    Section("Parent", [
        Route("parent_dashboard",          "Dashboard",        "🏠", parent_dashboard_render, ("parent",)),
        Route("parent_student_analytics",  "Performance",      "📊", parent_student_analytics_render, ("parent",)),
        Route("fee_information",           "Fee Information",  "💳", render_fee_information, ("parent",)),
        Route("parent_profile",            "Profile",          "👤", profile_page("parent"), ("parent",)),
        Route("parent_logout",             "Logout",           "🚪", logout_page("parent"), ("parent",)),
    ]),
]

# Index for quick lookup (used by router)
ROUTE_INDEX: Dict[str, Route] = {r.key: r for s in SECTIONS for r in s.routes}
DEFAULT_ROUTE_KEY = "home"


def visible_sections(store: Store) -> List[Section]:
    """Sidebar menu for the current session: public pages plus those of signed-in portals."""
    out = []
    for section in SECTIONS:
        routes = [r for r in section.routes if r.visible_to(store)]
        if routes:
            out.append(Section(section.title, routes))
    return out
