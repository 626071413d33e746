# ============================================
# tracking/views/project.py
# ============================================
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from drf_spectacular.utils import extend_schema

from tracking.serializers.project import (
    AddMembersSerializer,
    MembersAddedSerializer,
    ProjectCreateSerializer,
    ProjectOutputSerializer
)
from tracking.selectors.project import ProjectSelector
from tracking.services.project import ProjectService
from tracking.views.utils import path_uuid, std_errors


class ProjectListCreateAPIView(APIView):
    """
    GET: List projects the current user owns or belongs to
    POST: Create a new project

    Request body (POST):
    - name: string (required)
    - description: string (optional)
    """

    @extend_schema(tags=["Projects"], responses={200: ProjectOutputSerializer(many=True), **std_errors()})
    def get(self, request):
        projects = ProjectSelector.get_projects_by_user(request.user.id)

        projects_with_users = ProjectSelector.enrich_projects_with_users(projects)

        serializer = ProjectOutputSerializer(projects_with_users, many=True)
        return Response(serializer.data)

    @extend_schema(
        tags=["Projects"],
        request=ProjectCreateSerializer,
        responses={201: ProjectOutputSerializer, **std_errors()}
    )
    def post(self, request):
        serializer = ProjectCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        project = ProjectService.create_project(
            owner=request.user,
            **serializer.validated_data
        )

        # Enrich and return
        projects_with_users = ProjectSelector.enrich_projects_with_users([project])
        output_serializer = ProjectOutputSerializer(projects_with_users[0])

        return Response(output_serializer.data, status=status.HTTP_201_CREATED)


class ProjectDetailAPIView(APIView):
    """
    GET: Retrieve project details (members of any role)

    Path params:
    - project_id: UUID
    """

    @extend_schema(
        tags=["Projects"],
        parameters=[path_uuid("project_id", "Project ID")],
        responses={200: ProjectOutputSerializer, **std_errors()}
    )
    def get(self, request, project_id):
        project = ProjectSelector.get_project_detail(actor=request.user, project_id=project_id)

        projects_with_users = ProjectSelector.enrich_projects_with_users([project])
        serializer = ProjectOutputSerializer(projects_with_users[0])

        return Response(serializer.data)


class ProjectMembersAPIView(APIView):
    """
    POST: Add members to a project (project admins only)

    Request body:
    - newMembers: [{user: UUID, role: "admin" | "developer" | "viewer"}]
    """

    @extend_schema(
        tags=["Projects"],
        parameters=[path_uuid("project_id", "Project ID")],
        request=AddMembersSerializer,
        responses={200: MembersAddedSerializer, **std_errors()}
    )
    def post(self, request, project_id):
        serializer = AddMembersSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        project, message, _ = ProjectService.add_members(
            project_id=project_id,
            actor=request.user,
            candidates=serializer.validated_data.get('newMembers')
        )

        projects_with_users = ProjectSelector.enrich_projects_with_users([project])
        return Response({
            'message': message,
            'project': ProjectOutputSerializer(projects_with_users[0]).data
        })
