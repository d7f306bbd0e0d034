"""ORM models; importing this package registers every table on Base.metadata."""

from tawjih.models.base import Base
from tawjih.models.admin import Admin
from tawjih.models.bookmark import Bookmark
from tawjih.models.exam_calendar import ExamCalendar
from tawjih.models.job_competition import JobCompetition
from tawjih.models.saved_job import SavedJob
from tawjih.models.school_guidance import SchoolGuidance
from tawjih.models.seo_meta import HeroImage, SeoMeta
from tawjih.models.user import User

__all__ = [
    "Base",
    "Admin",
    "Bookmark",
    "ExamCalendar",
    "HeroImage",
    "JobCompetition",
    "SavedJob",
    "SchoolGuidance",
    "SeoMeta",
    "User",
]
