"""
Site header: the logo plus the navigation controls for the current role.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from ..core.security import AUTHENTICATED_ROLES, SessionExpiredError, UserRole


@dataclass
class NavItem:
    label: str
    icon: str
    # A link navigates with GET; a form posts to ``href``; a dialog opens a modal
    kind: str
    href: Optional[str] = None
    dialog: Optional[str] = None


@dataclass
class Header:
    title: str = "Hospital CMS"
    logo: str = "/static/images/logo.svg"
    nav: List[NavItem] = field(default_factory=list)


def build_header(path: str, role: Optional[UserRole], token: Optional[str]) -> Header:
    if path == "/":
        return Header()

    if role in AUTHENTICATED_ROLES and not token:
        raise SessionExpiredError()

    if role == UserRole.ADMIN:
        nav = [
            NavItem("Add Doctor", "fa-user-plus", "dialog", dialog="addDoctor"),
            NavItem("Logout", "fa-sign-out-alt", "form", href="/auth/logout"),
        ]
    elif role == UserRole.DOCTOR:
        nav = [
            NavItem("Home", "fa-home", "link", href="/doctor/dashboard"),
            NavItem("Logout", "fa-sign-out-alt", "form", href="/auth/logout"),
        ]
    elif role == UserRole.PATIENT:
        nav = [
            NavItem("Login", "fa-sign-in-alt", "dialog", dialog="patientLogin"),
            NavItem("Sign Up", "fa-user-plus", "dialog", dialog="patientSignup"),
        ]
    elif role == UserRole.LOGGED_PATIENT:
        nav = [
            NavItem("Home", "fa-home", "link", href="/patient/home"),
            NavItem("Appointments", "fa-calendar-check", "link", href="/patient/appointments"),
            NavItem("Logout", "fa-sign-out-alt", "form", href="/auth/patient/logout"),
        ]
    else:
        nav = [
            NavItem("Home", "fa-home", "link", href="/"),
            NavItem("Select Role", "fa-user-tag", "link", href="/"),
        ]

    return Header(nav=nav)
