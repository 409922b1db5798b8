"""
File upload gate for projects.

Checks a caller may attach a file to a project before its metadata is
written. Storing the bytes is the caller's job; the gate records where they
were put.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from django.conf import settings
from django.db import DEFAULT_DB_ALIAS
from django.db import transaction
from django.db.models import Count
from django.db.models import Max
from django.db.models import Sum

from academia.core.exceptions import FileTooLargeError
from academia.core.exceptions import InvalidFileTypeError
from academia.core.exceptions import NotFoundError
from academia.core.exceptions import NotOwnerError
from academia.core.exceptions import PermissionDeniedError
from academia.core.exceptions import ValidationError
from academia.projects.models import Project
from academia.projects.models import ProjectFile
from academia.projects.models import ProjectStatus

logger = logging.getLogger(__name__)

DEFAULT_MAX_UPLOAD_SIZE = 50 * 1024 * 1024

SIZE_UNITS = ["Bytes", "KB", "MB", "GB"]


def format_file_size(size: int | None) -> str:
    """Return a human-readable size, e.g. ``1.5 MB``."""
    if not size:
        return "0 Bytes"
    exponent = 0
    while exponent < len(SIZE_UNITS) - 1 and size >= 1024 ** (exponent + 1):
        exponent += 1
    value = round(size / 1024**exponent, 2)
    return f"{value:g} {SIZE_UNITS[exponent]}"


def allowed_file_types() -> list[str]:
    return list(getattr(settings, "ACADEMIA_UPLOAD_ALLOWED_TYPES", []))


def max_upload_size() -> int:
    return getattr(settings, "ACADEMIA_UPLOAD_MAX_SIZE", DEFAULT_MAX_UPLOAD_SIZE)


def is_file_type_allowed(mime_type: str | None, allowed_types: list[str] | None = None) -> bool:
    return mime_type in (allowed_types if allowed_types is not None else allowed_file_types())


def is_file_size_valid(file_size: int, max_size: int | None = None) -> bool:
    return 0 < file_size <= (max_size if max_size is not None else max_upload_size())


@dataclass(frozen=True)
class FileStats:
    """Aggregate figures for a project's files."""

    total_files: int
    total_size: int
    total_size_formatted: str
    last_upload: datetime | None


class FileUploadGate:
    """Authorizes and records project file uploads."""

    def __init__(self, using: str = DEFAULT_DB_ALIAS):
        self.using = using

    def authorize_upload(self, project_id: UUID, student_id: UUID, file_type: str, file_size: int) -> Project:
        """
        Check an upload may proceed and return the project.

        Order: project exists, caller owns it, title approved, type, size.
        """
        try:
            project = Project.objects.using(self.using).get(id=project_id)
        except Project.DoesNotExist:
            raise NotFoundError(f"Project {project_id} not found.") from None

        if project.student_id != student_id:
            raise NotOwnerError(f"Student does not own project {project_id}.")

        if project.status != ProjectStatus.APPROVED:
            raise PermissionDeniedError(
                f"Cannot upload files for project with {project.status} title. Title must be approved first.",
                code="TITLE_NOT_APPROVED",
                details={"status": project.status},
            )

        allowed = allowed_file_types()
        if not is_file_type_allowed(file_type, allowed):
            raise InvalidFileTypeError(
                f"File type {file_type} is not allowed.",
                details={"field": "file_type", "allowed": allowed},
            )

        if file_size <= 0:
            raise ValidationError("The file is empty.", field="file_size", min=1)
        limit = max_upload_size()
        if file_size > limit:
            raise FileTooLargeError(
                f"The file exceeds the maximum size of {format_file_size(limit)}.",
                details={"field": "file_size", "max": limit},
            )

        return project

    def record_upload(
        self,
        project: Project,
        uploaded_by_id: UUID,
        file_path: str,
        file_name: str,
        file_type: str,
        file_size: int,
    ) -> ProjectFile:
        """Write the metadata of a file already stored at ``file_path``."""
        project_file = ProjectFile.objects.using(self.using).create(
            project=project,
            uploaded_by_id=uploaded_by_id,
            file_path=file_path,
            file_name=file_name,
            file_type=file_type,
            file_size=file_size,
        )
        logger.info("File %s uploaded to project %s by %s", project_file.id, project.id, uploaded_by_id)
        return project_file

    def upload_project_file(
        self,
        project_id: UUID,
        student_id: UUID,
        file_path: str,
        file_name: str,
        file_type: str,
        file_size: int,
    ) -> ProjectFile:
        project = self.authorize_upload(project_id, student_id, file_type, file_size)
        return self.record_upload(project, student_id, file_path, file_name, file_type, file_size)

    def get_file(self, file_id: UUID) -> ProjectFile:
        try:
            return ProjectFile.objects.using(self.using).select_related("project").get(id=file_id)
        except ProjectFile.DoesNotExist:
            raise NotFoundError(f"File {file_id} not found.") from None

    def delete_file(self, file_id: UUID, user_id: UUID) -> ProjectFile:
        """Delete the metadata of a file. Only its uploader may do this."""
        with transaction.atomic(using=self.using):
            project_file = self.get_file(file_id)
            if project_file.uploaded_by_id != user_id:
                raise NotOwnerError("Only the uploader can delete this file.")
            project_file.delete()

        logger.info("File %s deleted by %s", file_id, user_id)
        return project_file

    def get_project_files(self, project_id: UUID) -> list[ProjectFile]:
        """Return the project's files, newest first."""
        return list(ProjectFile.objects.using(self.using).filter(project_id=project_id).order_by("-created"))

    def get_project_file_stats(self, project_id: UUID) -> FileStats:
        stats = ProjectFile.objects.using(self.using).filter(project_id=project_id).aggregate(
            total_files=Count("id"),
            total_size=Sum("file_size"),
            last_upload=Max("created"),
        )
        total_size = stats["total_size"] or 0
        return FileStats(
            total_files=stats["total_files"] or 0,
            total_size=total_size,
            total_size_formatted=format_file_size(total_size),
            last_upload=stats["last_upload"],
        )
