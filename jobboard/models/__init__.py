# Models module
from .user import User, UserRole, UserStatus
from .profile import StudentProfile, AlumniProfile
from .company import Company, CompanyStatus
from .job import Job
from .job_application import JobApplication
from .password_reset_token import PasswordResetToken
from .notification import Notification
from .messaging import Connection, ConnectionStatus, Message
from .revoked_token import RevokedToken
from .log import Log

__all__ = [
    "User",
    "UserRole",
    "UserStatus",
    "StudentProfile",
    "AlumniProfile",
    "Company",
    "CompanyStatus",
    "Job",
    "JobApplication",
    "PasswordResetToken",
    "Notification",
    "Connection",
    "ConnectionStatus",
    "Message",
    "RevokedToken",
    "Log"
]
