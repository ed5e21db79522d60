from skillconnect.models.user import User
from skillconnect.models.job import Job
from skillconnect.models.application import Application
from skillconnect.models.admin_activity import AdminActivity

__all__ = [
    "User",
    "Job",
    "Application",
    "AdminActivity",
]
