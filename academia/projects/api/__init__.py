"""
Project API controllers.

- ProjectsController: title submission and review (/api/projects/)
- FilesController: project file uploads (/api/files/)
- AdvisorsController: advisor assignment for department heads (/api/advisors/)
"""

from academia.projects.api.advisors import AdvisorsController
from academia.projects.api.files import FilesController
from academia.projects.api.projects import ProjectsController

__all__ = [
    "AdvisorsController",
    "FilesController",
    "ProjectsController",
]
