# ============================================
# tracking/services/comment.py
# ============================================
import logging

from django.core.exceptions import ValidationError
from django.http import Http404

from tracking.models import Ticket, TicketComment
from tracking.validators import parse_id

logger = logging.getLogger(__name__)


class CommentService:

    @staticmethod
    def add_comment(
        *,
        ticket_id,
        actor,
        text: str
    ) -> TicketComment:
        """Append a comment to a ticket"""

        # Visibility is not re-checked here: any authenticated user may comment
        if not (text or '').strip():
            raise ValidationError('Comment text cannot be empty.')

        tid = parse_id(ticket_id, 'ticket')
        ticket = Ticket.objects.filter(id=tid).first()
        if not ticket:
            raise Http404('Ticket not found.')

        comment = TicketComment.objects.create(
            ticket=ticket,
            author=actor,
            text=text
        )

        logger.info("[tickets] %s commented on ticket %s", actor.id, ticket.id)
        return comment
