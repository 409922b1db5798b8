"""
Tests for the file upload gate and the files API.
"""

import uuid

import pytest
from django.core.files.storage import default_storage
from django.core.files.uploadedfile import SimpleUploadedFile

from academia.core.exceptions import FileTooLargeError
from academia.core.exceptions import InvalidFileTypeError
from academia.core.exceptions import NotFoundError
from academia.core.exceptions import NotOwnerError
from academia.core.exceptions import PermissionDeniedError
from academia.core.exceptions import ValidationError
from academia.projects.api.files import storage_path
from academia.projects.models import ProjectFile
from academia.projects.services import FileUploadGate
from academia.projects.services.uploads import format_file_size
from academia.projects.services.uploads import is_file_size_valid
from academia.projects.services.uploads import is_file_type_allowed
from academia.projects.tests.factories import ProjectFactory
from academia.projects.tests.factories import ProjectFileFactory
from academia.users.tests.factories import StudentFactory

PDF = "application/pdf"


@pytest.fixture
def gate():
    return FileUploadGate()


@pytest.fixture
def approved_project(assignment):
    return ProjectFactory(student=assignment.student, instructor=assignment.instructor, approved=True)


class TestStoragePath:
    def test_path_is_scoped_to_project(self):
        project_id = uuid.uuid4()

        path = storage_path(project_id, "report.pdf")

        prefix = f"projects/{project_id}/"
        assert path.startswith(prefix)
        assert path.endswith("_report.pdf")
        assert storage_path(project_id, "report.pdf") != path


class TestFormatFileSize:
    @pytest.mark.parametrize(
        ("size", "expected"),
        [
            (0, "0 Bytes"),
            (None, "0 Bytes"),
            (500, "500 Bytes"),
            (1024, "1 KB"),
            (1536, "1.5 KB"),
            (1024 * 1024, "1 MB"),
            (5 * 1024**3, "5 GB"),
        ],
    )
    def test_format(self, size, expected):
        assert format_file_size(size) == expected


class TestUploadChecks:
    def test_file_type_allowed(self, settings):
        assert is_file_type_allowed(PDF)
        assert not is_file_type_allowed("application/x-msdownload")
        assert not is_file_type_allowed(None)

    def test_file_size_valid(self, settings):
        settings.ACADEMIA_UPLOAD_MAX_SIZE = 100
        assert is_file_size_valid(100)
        assert not is_file_size_valid(101)
        assert not is_file_size_valid(0)


@pytest.mark.django_db
class TestAuthorizeUpload:
    """Tests for FileUploadGate.authorize_upload."""

    def test_approved_project_accepts_upload(self, gate, approved_project):
        project = gate.authorize_upload(approved_project.id, approved_project.student_id, PDF, 2048)

        assert project.id == approved_project.id

    @pytest.mark.parametrize("trait", [{}, {"rejected": True}])
    def test_undecided_or_rejected_project_refuses(self, gate, assignment, trait):
        project = ProjectFactory(student=assignment.student, instructor=assignment.instructor, **trait)

        with pytest.raises(PermissionDeniedError) as exc_info:
            gate.authorize_upload(project.id, project.student_id, PDF, 2048)

        assert exc_info.value.code == "TITLE_NOT_APPROVED"
        assert "Title must be approved first" in exc_info.value.message

    def test_other_student_refused(self, gate, approved_project, department):
        with pytest.raises(NotOwnerError):
            gate.authorize_upload(approved_project.id, StudentFactory(department=department).id, PDF, 2048)

    def test_unknown_project(self, gate, student):
        with pytest.raises(NotFoundError):
            gate.authorize_upload(uuid.uuid4(), student.id, PDF, 2048)

    def test_ownership_checked_before_status(self, gate, assignment, department):
        project = ProjectFactory(student=assignment.student, instructor=assignment.instructor)

        with pytest.raises(NotOwnerError):
            gate.authorize_upload(project.id, StudentFactory(department=department).id, PDF, 2048)

    def test_disallowed_type(self, gate, approved_project):
        with pytest.raises(InvalidFileTypeError) as exc_info:
            gate.authorize_upload(approved_project.id, approved_project.student_id, "application/x-sh", 10)

        assert PDF in exc_info.value.details["allowed"]

    def test_too_large(self, gate, approved_project, settings):
        settings.ACADEMIA_UPLOAD_MAX_SIZE = 1024

        with pytest.raises(FileTooLargeError) as exc_info:
            gate.authorize_upload(approved_project.id, approved_project.student_id, PDF, 1025)

        assert exc_info.value.details["max"] == 1024

    def test_empty_file(self, gate, approved_project):
        with pytest.raises(ValidationError):
            gate.authorize_upload(approved_project.id, approved_project.student_id, PDF, 0)


@pytest.mark.django_db
class TestFileRecords:
    """Tests for recording, listing and deleting file metadata."""

    def test_upload_project_file(self, gate, approved_project):
        project_file = gate.upload_project_file(
            approved_project.id,
            approved_project.student_id,
            file_path="projects/report.pdf",
            file_name="report.pdf",
            file_type=PDF,
            file_size=1536,
        )

        assert project_file.project_id == approved_project.id
        assert project_file.uploaded_by_id == approved_project.student_id

    def test_stats(self, gate, approved_project):
        ProjectFileFactory(project=approved_project, file_size=1024)
        ProjectFileFactory(project=approved_project, file_size=512)

        stats = gate.get_project_file_stats(approved_project.id)

        assert stats.total_files == 2
        assert stats.total_size == 1536
        assert stats.total_size_formatted == "1.5 KB"
        assert stats.last_upload is not None

    def test_stats_without_files(self, gate, approved_project):
        stats = gate.get_project_file_stats(approved_project.id)

        assert stats.total_files == 0
        assert stats.total_size_formatted == "0 Bytes"

    def test_only_uploader_deletes(self, gate, approved_project):
        project_file = ProjectFileFactory(project=approved_project)

        with pytest.raises(NotOwnerError):
            gate.delete_file(project_file.id, approved_project.instructor_id)

        gate.delete_file(project_file.id, approved_project.student_id)
        assert not ProjectFile.objects.filter(id=project_file.id).exists()


@pytest.mark.django_db
class TestFilesAPI:
    """Tests for /api/files."""

    def test_upload_stores_file(self, client_for, approved_project):
        upload = SimpleUploadedFile("report.pdf", b"%PDF-1.4 test", content_type=PDF)

        response = client_for(approved_project.student).post(
            f"/api/files/projects/{approved_project.id}",
            data={"file": upload},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["file_name"] == "report.pdf"
        assert data["file_type"] == PDF
        stored = ProjectFile.objects.get(id=data["id"])
        assert default_storage.exists(stored.file_path)
        assert stored.file_path.startswith(f"projects/{approved_project.id}/")
        assert stored.file_path.endswith("_report.pdf")

    def test_upload_to_draft_refused(self, client_for, assignment):
        project = ProjectFactory(student=assignment.student, instructor=assignment.instructor)
        upload = SimpleUploadedFile("report.pdf", b"%PDF-1.4 test", content_type=PDF)

        response = client_for(project.student).post(f"/api/files/projects/{project.id}", data={"file": upload})

        assert response.status_code == 403
        assert response.json()["code"] == "TITLE_NOT_APPROVED"
        assert ProjectFile.objects.count() == 0

    def test_upload_wrong_type(self, client_for, approved_project):
        upload = SimpleUploadedFile("run.sh", b"echo hi", content_type="application/x-sh")

        response = client_for(approved_project.student).post(
            f"/api/files/projects/{approved_project.id}",
            data={"file": upload},
        )

        assert response.status_code == 415

    def test_instructor_cannot_upload(self, client_for, approved_project):
        upload = SimpleUploadedFile("report.pdf", b"%PDF-1.4 test", content_type=PDF)

        response = client_for(approved_project.instructor).post(
            f"/api/files/projects/{approved_project.id}",
            data={"file": upload},
        )

        assert response.status_code == 403

    def test_list_and_stats(self, client_for, approved_project):
        ProjectFileFactory(project=approved_project, file_size=2048)
        client = client_for(approved_project.instructor)

        files = client.get(f"/api/files/projects/{approved_project.id}")
        stats = client.get(f"/api/files/projects/{approved_project.id}/stats")

        assert files.status_code == 200
        assert len(files.json()) == 1
        assert stats.json()["total_size_formatted"] == "2 KB"

    def test_list_hidden_from_outsiders(self, client_for, approved_project):
        response = client_for(StudentFactory()).get(f"/api/files/projects/{approved_project.id}")

        assert response.status_code == 403

    def test_delete_removes_stored_file(self, client_for, approved_project):
        path = default_storage.save("projects/old.pdf", SimpleUploadedFile("old.pdf", b"old"))
        project_file = ProjectFileFactory(project=approved_project, file_path=path)

        response = client_for(approved_project.student).delete(f"/api/files/{project_file.id}")

        assert response.status_code == 200
        assert not default_storage.exists(path)
