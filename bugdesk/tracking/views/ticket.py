# ============================================
# tracking/views/ticket.py
# ============================================
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.parsers import FormParser, MultiPartParser
from drf_spectacular.utils import extend_schema

from tracking.serializers.ticket import (
    ScreenshotUploadSerializer,
    ScreenshotUploadedSerializer,
    TicketCreateSerializer,
    TicketDetailOutputSerializer,
    TicketOutputSerializer,
    TicketUpdateSerializer
)
from tracking.selectors.ticket import TicketSelector
from tracking.services.screenshot import FIELD_NAME
from tracking.services.ticket import TicketService
from tracking.views.utils import MessageSerializer, path_uuid, std_errors


def _ticket_list_response(tickets):
    tickets_with_users = TicketSelector.enrich_tickets_with_users(tickets)
    return Response(TicketOutputSerializer(tickets_with_users, many=True).data)


class TicketCreateAPIView(APIView):
    """
    POST: Create a ticket

    Request body:
    - title: string (required)
    - project: UUID (required)
    - description: string (optional)
    - priority: "Low" | "Medium" | "High" (optional, default Medium)
    """

    @extend_schema(
        tags=["Tickets"],
        request=TicketCreateSerializer,
        responses={201: TicketOutputSerializer, **std_errors()}
    )
    def post(self, request):
        serializer = TicketCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        ticket = TicketService.create_ticket(
            actor=request.user,
            project_id=data['project'],
            title=data['title'],
            description=data['description'],
            priority=data['priority']
        )

        tickets_with_users = TicketSelector.enrich_tickets_with_users([ticket])
        output_serializer = TicketOutputSerializer(tickets_with_users[0])

        return Response(output_serializer.data, status=status.HTTP_201_CREATED)


class MyTicketsAPIView(APIView):
    """GET: Tickets the current user created or is assigned to"""

    @extend_schema(tags=["Tickets"], responses={200: TicketOutputSerializer(many=True), **std_errors()})
    def get(self, request):
        return _ticket_list_response(TicketSelector.list_my_tickets(request.user))


class ProjectTicketsAPIView(APIView):
    """GET: Tickets in one project that the current user created or is assigned to"""

    @extend_schema(
        tags=["Tickets"],
        parameters=[path_uuid("project_id", "Project ID")],
        responses={200: TicketOutputSerializer(many=True), **std_errors()}
    )
    def get(self, request, project_id):
        return _ticket_list_response(TicketSelector.list_project_tickets(request.user, project_id))


class TicketDetailAPIView(APIView):
    """
    GET: Retrieve ticket with comments
    PUT: Update ticket (assignees may change status only)
    DELETE: Delete ticket (creator or project admin)

    Path params:
    - ticket_id: UUID
    """

    @extend_schema(
        tags=["Tickets"],
        parameters=[path_uuid("ticket_id", "Ticket ID")],
        responses={200: TicketDetailOutputSerializer, **std_errors()}
    )
    def get(self, request, ticket_id):
        ticket = TicketSelector.get_ticket_detail(actor=request.user, ticket_id=ticket_id)
        return Response(TicketDetailOutputSerializer(ticket).data)

    @extend_schema(
        tags=["Tickets"],
        parameters=[path_uuid("ticket_id", "Ticket ID")],
        request=TicketUpdateSerializer,
        responses={200: TicketDetailOutputSerializer, **std_errors()}
    )
    def put(self, request, ticket_id):
        serializer = TicketUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        ticket = TicketService.update_ticket(
            ticket_id=ticket_id,
            actor=request.user,
            **serializer.validated_data
        )

        tickets_with_users = TicketSelector.enrich_tickets_with_users([ticket], with_comments=True)
        return Response(TicketDetailOutputSerializer(tickets_with_users[0]).data)

    @extend_schema(
        tags=["Tickets"],
        parameters=[path_uuid("ticket_id", "Ticket ID")],
        responses={200: MessageSerializer, **std_errors()}
    )
    def delete(self, request, ticket_id):
        TicketService.delete_ticket(ticket_id=ticket_id, actor=request.user)
        return Response({'message': 'Ticket removed successfully'})


class TicketScreenshotAPIView(APIView):
    """
    POST: Upload an image (multipart field `screenshot`) and attach it to the ticket
    """
    parser_classes = [MultiPartParser, FormParser]

    @extend_schema(
        tags=["Tickets"],
        parameters=[path_uuid("ticket_id", "Ticket ID")],
        request={'multipart/form-data': ScreenshotUploadSerializer},
        responses={200: ScreenshotUploadedSerializer, **std_errors()}
    )
    def post(self, request, ticket_id):
        url = TicketService.attach_screenshot(
            ticket_id=ticket_id,
            actor=request.user,
            upload=request.FILES.get(FIELD_NAME),
            base_url=request.build_absolute_uri('/')
        )
        return Response({'message': 'Screenshot uploaded successfully', 'imageUrl': url})
