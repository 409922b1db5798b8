"""
Project files API controller.
"""

import logging
from uuid import UUID
from uuid import uuid4

from django.core.files.storage import default_storage
from django.http import HttpRequest
from ninja import File
from ninja import UploadedFile
from ninja_extra import api_controller
from ninja_extra import http_delete
from ninja_extra import http_get
from ninja_extra import http_post

from academia.core.api import BaseAPI
from academia.core.api import HasAction
from academia.core.api import IsAuthenticated
from academia.core.exceptions import BadRequestError
from academia.core.exceptions import ErrorSchema
from academia.core.policy import Action
from academia.core.schemas import SuccessSchema
from academia.projects.api.access import ensure_can_view_project
from academia.projects.schemas import FileStatsSchema
from academia.projects.schemas import ProjectFileSchema
from academia.projects.services import FileUploadGate
from academia.projects.services import ProjectLifecycleService

logger = logging.getLogger(__name__)


def storage_path(project_id: UUID, filename: str) -> str:
    """Generate storage path for a project file."""
    return f"projects/{project_id}/{uuid4().hex}_{filename}"


@api_controller("/files", tags=["Project files"], permissions=[IsAuthenticated])
class FilesController(BaseAPI):
    """API endpoints for files attached to approved projects."""

    gate = FileUploadGate()
    lifecycle = ProjectLifecycleService()

    @http_post(
        "/projects/{uuid:project_id}",
        response={
            201: ProjectFileSchema,
            400: ErrorSchema,
            403: ErrorSchema,
            404: ErrorSchema,
            413: ErrorSchema,
            415: ErrorSchema,
        },
        permissions=[HasAction.to(Action.UPLOAD_FILE)],
        url_name="files_upload",
    )
    def upload_file(self, request: HttpRequest, project_id: UUID, file: UploadedFile = File(...)):
        """Upload a file for the student's approved project."""
        if not file:
            return BadRequestError("No file provided.").to_response()

        file_type = file.content_type or "application/octet-stream"
        project = self.gate.authorize_upload(project_id, request.user.id, file_type, file.size)

        path = default_storage.save(storage_path(project.id, file.name), file)
        try:
            project_file = self.gate.record_upload(
                project,
                uploaded_by_id=request.user.id,
                file_path=path,
                file_name=file.name,
                file_type=file_type,
                file_size=file.size,
            )
        except Exception:
            default_storage.delete(path)
            raise

        return 201, ProjectFileSchema.from_file(project_file)

    @http_get(
        "/projects/{uuid:project_id}",
        response={200: list[ProjectFileSchema], 403: ErrorSchema, 404: ErrorSchema},
        url_name="files_list",
    )
    def list_files(self, request: HttpRequest, project_id: UUID):
        """List a project's files, newest first."""
        project = self.lifecycle.get_project(project_id)
        ensure_can_view_project(project, request.user)
        return 200, [ProjectFileSchema.from_file(f) for f in self.gate.get_project_files(project.id)]

    @http_get(
        "/projects/{uuid:project_id}/stats",
        response={200: FileStatsSchema, 403: ErrorSchema, 404: ErrorSchema},
        url_name="files_stats",
    )
    def file_stats(self, request: HttpRequest, project_id: UUID):
        """Count and size of a project's files."""
        project = self.lifecycle.get_project(project_id)
        ensure_can_view_project(project, request.user)
        return 200, FileStatsSchema.from_stats(self.gate.get_project_file_stats(project.id))

    @http_delete(
        "/{uuid:file_id}",
        response={200: SuccessSchema, 403: ErrorSchema, 404: ErrorSchema},
        permissions=[HasAction.to(Action.DELETE_FILE)],
        url_name="files_delete",
    )
    def delete_file(self, request: HttpRequest, file_id: UUID):
        """Delete a file. Only its uploader can do this."""
        project_file = self.gate.delete_file(file_id, request.user.id)
        default_storage.delete(project_file.file_path)
        return 200, SuccessSchema(success=True, message="File deleted.")
