import uuid

import django.db.models.deletion
import django.utils.timezone
import django_fsm
import model_utils.fields
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Project',
            fields=[
                ('created', model_utils.fields.AutoCreatedField(default=django.utils.timezone.now, editable=False, verbose_name='created')),
                ('modified', model_utils.fields.AutoLastModifiedField(default=django.utils.timezone.now, editable=False, verbose_name='modified')),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('assigned_at', models.DateTimeField(blank=True, null=True, verbose_name='assigned at')),
                ('title', models.CharField(max_length=255, verbose_name='title')),
                ('description', models.TextField(blank=True, verbose_name='description')),
                ('status', django_fsm.FSMField(choices=[('draft', 'Draft'), ('submitted', 'Submitted'), ('approved', 'Approved'), ('rejected', 'Rejected')], default='draft', max_length=50, protected=True, verbose_name='status')),
                ('submitted_at', models.DateTimeField(blank=True, default=django.utils.timezone.now, null=True, verbose_name='submitted at')),
                ('approved_at', models.DateTimeField(blank=True, null=True, verbose_name='approved at')),
                ('rejected_at', models.DateTimeField(blank=True, null=True, verbose_name='rejected at')),
                ('advisor', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='advised_projects', to=settings.AUTH_USER_MODEL, verbose_name='advisor')),
                ('assigned_by', models.ForeignKey(blank=True, db_column='assigned_by', help_text='Department head who set the advisor', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='advisor_assignments', to=settings.AUTH_USER_MODEL, verbose_name='assigned by')),
                ('instructor', models.ForeignKey(help_text='Instructor who reviews the title', on_delete=django.db.models.deletion.PROTECT, related_name='reviewed_projects', to=settings.AUTH_USER_MODEL, verbose_name='instructor')),
                ('student', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='projects', to=settings.AUTH_USER_MODEL, verbose_name='student')),
            ],
            options={
                'verbose_name': 'project',
                'verbose_name_plural': 'projects',
                'db_table': 'projects',
                'ordering': ['-created'],
                'constraints': [
                    models.UniqueConstraint(fields=('student', 'title'), name='unique_project_title_per_student'),
                    models.CheckConstraint(condition=models.Q(('approved_at__isnull', False), ('rejected_at__isnull', False), _negated=True), name='project_single_decision'),
                    models.CheckConstraint(condition=models.Q(models.Q(('status', 'draft'), _negated=True), models.Q(('approved_at__isnull', True), ('rejected_at__isnull', True)), _connector='OR'), name='project_draft_undecided'),
                ],
            },
        ),
        migrations.CreateModel(
            name='ProjectFile',
            fields=[
                ('created', model_utils.fields.AutoCreatedField(default=django.utils.timezone.now, editable=False, verbose_name='created')),
                ('modified', model_utils.fields.AutoLastModifiedField(default=django.utils.timezone.now, editable=False, verbose_name='modified')),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('file_path', models.CharField(max_length=500, verbose_name='file path')),
                ('file_name', models.CharField(max_length=255, verbose_name='file name')),
                ('file_type', models.CharField(max_length=100, verbose_name='file type')),
                ('file_size', models.PositiveBigIntegerField(verbose_name='file size')),
                ('project', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='files', to='projects.project', verbose_name='project')),
                ('uploaded_by', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='uploaded_project_files', to=settings.AUTH_USER_MODEL, verbose_name='uploaded by')),
            ],
            options={
                'verbose_name': 'project file',
                'verbose_name_plural': 'project files',
                'db_table': 'project_files',
                'ordering': ['-created'],
            },
        ),
    ]
