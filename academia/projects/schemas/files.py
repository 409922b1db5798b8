"""
Project file schemas.
"""

from datetime import datetime
from uuid import UUID

from ninja import Schema

from academia.projects.models import ProjectFile
from academia.projects.services.uploads import FileStats
from academia.projects.services.uploads import format_file_size


class ProjectFileSchema(Schema):
    """Project file metadata response schema."""

    id: UUID
    project_id: UUID
    uploaded_by_id: UUID
    file_name: str
    file_type: str
    file_size: int
    file_size_formatted: str
    uploaded_at: datetime

    @staticmethod
    def from_file(project_file: ProjectFile) -> "ProjectFileSchema":
        return ProjectFileSchema(
            id=project_file.id,
            project_id=project_file.project_id,
            uploaded_by_id=project_file.uploaded_by_id,
            file_name=project_file.file_name,
            file_type=project_file.file_type,
            file_size=project_file.file_size,
            file_size_formatted=format_file_size(project_file.file_size),
            uploaded_at=project_file.uploaded_at,
        )


class FileStatsSchema(Schema):
    """Aggregate figures for a project's files."""

    total_files: int
    total_size: int
    total_size_formatted: str
    last_upload: datetime | None = None

    @staticmethod
    def from_stats(stats: FileStats) -> "FileStatsSchema":
        return FileStatsSchema(
            total_files=stats.total_files,
            total_size=stats.total_size,
            total_size_formatted=stats.total_size_formatted,
            last_upload=stats.last_upload,
        )
