# ============================================
# tracking/views/comment.py
# ============================================
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from drf_spectacular.utils import extend_schema

from tracking.serializers.comment import CommentCreateSerializer, CommentOutputSerializer
from tracking.selectors.comment import CommentSelector
from tracking.services.comment import CommentService
from tracking.views.utils import path_uuid, std_errors


class TicketCommentsAPIView(APIView):
    """
    POST: Add a comment to a ticket

    Request body:
    - text: string (required, non-blank)
    """

    @extend_schema(
        tags=["Tickets"],
        parameters=[path_uuid("ticket_id", "Ticket ID")],
        request=CommentCreateSerializer,
        responses={201: CommentOutputSerializer, **std_errors()}
    )
    def post(self, request, ticket_id):
        serializer = CommentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        comment = CommentService.add_comment(
            ticket_id=ticket_id,
            actor=request.user,
            text=serializer.validated_data['text']
        )

        comments_with_users = CommentSelector.enrich_comments_with_users([comment])
        return Response(
            CommentOutputSerializer(comments_with_users[0]).data,
            status=status.HTTP_201_CREATED
        )
