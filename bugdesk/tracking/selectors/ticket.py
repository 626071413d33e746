# ============================================
# tracking/selectors/ticket.py
# ============================================
from typing import List, Optional

from django.core.exceptions import PermissionDenied
from django.db.models import Q, QuerySet
from django.http import Http404

from accounts.selectors.user_selector import get_users_map
from tracking.models import Ticket
from tracking.selectors.comment import CommentSelector
from tracking.services.authorization import TicketAccess
from tracking.validators import parse_id


class TicketSelector:

    @staticmethod
    def get_ticket_by_id(ticket_id) -> Optional[Ticket]:
        """Get single ticket with related data"""
        try:
            return Ticket.objects.select_related('project', 'created_by').get(id=ticket_id)
        except Ticket.DoesNotExist:
            return None

    @staticmethod
    def _involving(user_id) -> Q:
        return Q(created_by_id=user_id) | Q(assignees__id=user_id)

    @staticmethod
    def list_my_tickets(user) -> QuerySet:
        """Tickets the user created or is assigned to, newest first"""
        return (
            Ticket.objects.select_related('project')
            .filter(TicketSelector._involving(user.id))
            .distinct()
            .order_by('-created_at')
        )

    @staticmethod
    def list_project_tickets(user, project_id) -> QuerySet:
        pid = parse_id(project_id, 'project')
        return TicketSelector.list_my_tickets(user).filter(project_id=pid)

    @staticmethod
    def get_ticket_detail(*, actor, ticket_id) -> Ticket:
        tid = parse_id(ticket_id, 'ticket')
        ticket = TicketSelector.get_ticket_by_id(tid)
        if not ticket:
            raise Http404('Ticket not found.')

        if not TicketAccess(actor, ticket).can_view:
            raise PermissionDenied('Not authorized to view this ticket.')

        return TicketSelector.enrich_tickets_with_users([ticket], with_comments=True)[0]

    @staticmethod
    def enrich_tickets_with_users(tickets: List[Ticket], with_comments: bool = False) -> List[Ticket]:
        """
        Fetch and attach user data to tickets.

        Sets `created_by_data`, `assignees_data` and, when requested,
        `comments_data` (each comment with `author_data`).
        """
        tickets = list(tickets)
        assignee_ids = {}
        user_ids = set()

        through = Ticket.assignees.through
        for row in through.objects.filter(ticket__in=tickets).order_by('id'):
            assignee_ids.setdefault(row.ticket_id, []).append(row.user_id)
            user_ids.add(row.user_id)

        for ticket in tickets:
            user_ids.add(ticket.created_by_id)

        users_dict = get_users_map(user_ids)

        for ticket in tickets:
            ticket.created_by_data = users_dict.get(str(ticket.created_by_id))
            ticket.assignees_data = [
                users_dict[str(uid)]
                for uid in assignee_ids.get(ticket.id, [])
                if str(uid) in users_dict
            ]
            if with_comments:
                ticket.comments_data = CommentSelector.enrich_comments_with_users(
                    CommentSelector.get_comments_by_ticket(ticket.id)
                )

        return tickets
