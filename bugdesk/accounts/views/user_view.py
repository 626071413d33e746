# -*- coding: utf-8 -*-
from __future__ import annotations
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from accounts.selectors.directory_selector import search_users
from accounts.serializers.auth_serializer import UserDisplaySerializer
from accounts.serializers.user_serializer import UserSearchQuerySerializer


class UserSearchView(APIView):
    """
    GET: Search users by partial email

    Query params:
    - email: string (required, case-insensitive substring)
    - projectId: UUID (optional, excludes that project's members)
    """

    @extend_schema(
        tags=["Users"],
        summary="Search users by email fragment",
        parameters=[
            OpenApiParameter("email", OpenApiTypes.STR, OpenApiParameter.QUERY, required=True, description="Email fragment"),
            OpenApiParameter("projectId", OpenApiTypes.UUID, OpenApiParameter.QUERY, description="Exclude members of this project"),
        ],
        responses={200: UserDisplaySerializer(many=True)},
    )
    def get(self, request):
        ser = UserSearchQuerySerializer(data=request.query_params)
        ser.is_valid(raise_exception=True)
        users = search_users(
            actor=request.user,
            email=ser.validated_data["email"],
            project_id=ser.validated_data["projectId"] or None,
        )
        return Response(users)
