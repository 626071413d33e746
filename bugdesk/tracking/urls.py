# ============================================
# tracking/urls.py
# ============================================
from django.urls import re_path
from tracking.views.project import (
    ProjectListCreateAPIView,
    ProjectDetailAPIView,
    ProjectMembersAPIView
)
from tracking.views.ticket import (
    TicketCreateAPIView,
    MyTicketsAPIView,
    ProjectTicketsAPIView,
    TicketDetailAPIView,
    TicketScreenshotAPIView
)
from tracking.views.comment import TicketCommentsAPIView

app_name = 'tracking'

# Ids are captured loosely; malformed ids are rejected with 400 by the services
urlpatterns = [
    # Projects
    re_path(r'^projects/?$', ProjectListCreateAPIView.as_view(), name='project-list-create'),
    re_path(r'^projects/(?P<project_id>[^/]+)/members/?$', ProjectMembersAPIView.as_view(), name='project-members'),
    re_path(r'^projects/(?P<project_id>[^/]+)/?$', ProjectDetailAPIView.as_view(), name='project-detail'),

    # Tickets (fixed segments before <ticket_id>)
    re_path(r'^tickets/?$', TicketCreateAPIView.as_view(), name='ticket-create'),
    re_path(r'^tickets/my-tickets/?$', MyTicketsAPIView.as_view(), name='my-tickets'),
    re_path(r'^tickets/project/(?P<project_id>[^/]+)/?$', ProjectTicketsAPIView.as_view(), name='project-tickets'),
    re_path(r'^tickets/(?P<ticket_id>[^/]+)/comments/?$', TicketCommentsAPIView.as_view(), name='ticket-comments'),
    re_path(
        r'^tickets/(?P<ticket_id>[^/]+)/upload-screenshot/?$',
        TicketScreenshotAPIView.as_view(),
        name='ticket-upload-screenshot'
    ),
    re_path(r'^tickets/(?P<ticket_id>[^/]+)/?$', TicketDetailAPIView.as_view(), name='ticket-detail'),
]
