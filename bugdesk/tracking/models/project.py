# ============================================
# tracking/models/project.py
# ============================================
import uuid

from django.conf import settings
from django.db import models


class ProjectRole(models.TextChoices):
    ADMIN = 'admin', 'Admin'
    DEVELOPER = 'developer', 'Developer'
    VIEWER = 'viewer', 'Viewer'


class Project(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='owned_projects'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'projects'
        ordering = ['-created_at']

    def __str__(self):
        return self.name


class ProjectMember(models.Model):
    # No unique (project, user) constraint: ProjectService dedups on add
    project = models.ForeignKey(
        'Project',
        on_delete=models.CASCADE,
        related_name='members'
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='project_memberships'
    )
    role = models.CharField(
        max_length=10,
        choices=ProjectRole.choices,
        default=ProjectRole.DEVELOPER
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'project_members'
        ordering = ['created_at', 'id']
        indexes = [
            models.Index(fields=['project', 'user'], name='project_member_lookup_idx'),
        ]

    def __str__(self):
        return f"{self.project_id} - {self.user_id} ({self.role})"
