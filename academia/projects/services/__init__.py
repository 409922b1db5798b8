"""
Workflow services for projects.
"""

from academia.projects.services.advisors import AdvisorAssignmentService
from academia.projects.services.lifecycle import ProjectLifecycleService
from academia.projects.services.uploads import FileUploadGate

__all__ = ["AdvisorAssignmentService", "FileUploadGate", "ProjectLifecycleService"]
