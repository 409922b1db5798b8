"""
Project, file and advisor schemas.
"""

from academia.projects.schemas.advisors import AdvisorAssignSchema
from academia.projects.schemas.advisors import AvailableInstructorSchema
from academia.projects.schemas.advisors import DepartmentProjectSchema
from academia.projects.schemas.files import FileStatsSchema
from academia.projects.schemas.files import ProjectFileSchema
from academia.projects.schemas.projects import PendingProjectSchema
from academia.projects.schemas.projects import ProjectSchema
from academia.projects.schemas.projects import ProjectStatusSchema
from academia.projects.schemas.projects import RejectTitleSchema
from academia.projects.schemas.projects import TitleRequestSchema
from academia.projects.schemas.projects import TitleSubmitSchema

__all__ = [
    "ProjectSchema",
    "ProjectStatusSchema",
    "PendingProjectSchema",
    "TitleSubmitSchema",
    "TitleRequestSchema",
    "RejectTitleSchema",
    "ProjectFileSchema",
    "FileStatsSchema",
    "AdvisorAssignSchema",
    "AvailableInstructorSchema",
    "DepartmentProjectSchema",
]
