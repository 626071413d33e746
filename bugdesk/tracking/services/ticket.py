# ============================================
# tracking/services/ticket.py
# ============================================
import logging
from typing import Dict, Optional

from django.core.exceptions import PermissionDenied, ValidationError
from django.db import transaction
from django.http import Http404

from accounts.selectors.user_selector import missing_user_ids
from tracking.models import Project, Ticket
from tracking.services import screenshot
from tracking.services.authorization import TicketAccess
from tracking.validators import parse_id

logger = logging.getLogger(__name__)

FIELD_CHANGES = ('title', 'description', 'priority', 'assignees')


def _allowed(choices) -> str:
    return ', '.join(choices.values)


class TicketService:

    @staticmethod
    def _get_ticket(ticket_id) -> Ticket:
        tid = parse_id(ticket_id, 'ticket')
        ticket = Ticket.objects.select_related('project').filter(id=tid).first()
        if not ticket:
            raise Http404('Ticket not found.')
        return ticket

    @staticmethod
    def _validate_priority(priority: str) -> None:
        if priority not in Ticket.Priority.values:
            raise ValidationError(
                f"Invalid priority provided. Must be one of: {_allowed(Ticket.Priority)}"
            )

    @staticmethod
    def create_ticket(
        *,
        actor,
        project_id,
        title: str,
        description: str = '',
        priority: Optional[str] = None
    ) -> Ticket:
        """Create a ticket; project membership is not checked here"""

        if not (title or '').strip() or not project_id:
            raise ValidationError('Title and Project are required.')

        pid = parse_id(project_id, 'project')
        if priority is not None:
            TicketService._validate_priority(priority)

        project = Project.objects.filter(id=pid).first()
        if not project:
            raise Http404('Project not found.')

        ticket = Ticket.objects.create(
            project=project,
            title=title.strip(),
            description=(description or '').strip(),
            priority=priority or Ticket.Priority.MEDIUM,
            created_by=actor
        )

        logger.info("[tickets] %s created ticket %s in project %s", actor.id, ticket.id, project.id)
        return ticket

    @staticmethod
    def _authorize_update(access: TicketAccess, data: Dict) -> None:
        if access.can_edit_fields:
            return
        if data.get('status') is not None and not access.can_change_status:
            raise PermissionDenied('Not authorized to update ticket status.')
        if any(data.get(field) is not None for field in FIELD_CHANGES):
            raise PermissionDenied('Only ticket creator or project manager can update these fields.')
        # An empty or all-null update still needs assignee rights
        if not access.can_change_status:
            raise PermissionDenied('Not authorized to update ticket status.')

    @staticmethod
    def _validate_update(data: Dict) -> None:
        status = data.get('status')
        if status is not None and status not in Ticket.Status.values:
            raise ValidationError(
                f"Invalid status provided. Must be one of: {_allowed(Ticket.Status)}"
            )

        if data.get('priority') is not None:
            TicketService._validate_priority(data['priority'])

        assignees = data.get('assignees')
        if assignees is not None:
            if not isinstance(assignees, (list, tuple)):
                raise ValidationError('Assignees must be an array of user IDs.')
            ids = [parse_id(uid, 'user') for uid in assignees]
            unknown = missing_user_ids(ids)
            if unknown:
                raise ValidationError(f"Unknown assignee(s): {', '.join(unknown)}")

    @staticmethod
    @transaction.atomic
    def update_ticket(
        *,
        ticket_id,
        actor,
        **data
    ) -> Ticket:
        """
        Update ticket fields.

        Creator and project admins may change anything; assignees may change
        status only. Status may move between any two values.
        """
        ticket = TicketService._get_ticket(ticket_id)
        access = TicketAccess(actor, ticket)

        TicketService._authorize_update(access, data)
        TicketService._validate_update(data)

        changed = [
            field for field in ('title', 'description', 'status', 'priority')
            if data.get(field) is not None
        ]
        for field in changed:
            setattr(ticket, field, data[field])
        if changed:
            ticket.save()

        if data.get('assignees') is not None:
            ticket.assignees.set([parse_id(uid, 'user') for uid in data['assignees']])

        logger.info(
            "[tickets] %s updated ticket %s (%s)",
            actor.id, ticket.id, ', '.join(sorted(k for k, v in data.items() if v is not None))
        )
        return Ticket.objects.select_related('project', 'created_by').get(id=ticket.id)

    @staticmethod
    @transaction.atomic
    def delete_ticket(*, ticket_id, actor) -> None:
        """Delete ticket; its screenshot files are removed after commit, best-effort"""

        ticket = TicketService._get_ticket(ticket_id)
        if not TicketAccess(actor, ticket).can_delete:
            raise PermissionDenied('Not authorized to delete this ticket.')

        urls = list(ticket.screenshots or [])
        ticket.delete()
        logger.info("[tickets] %s deleted ticket %s", actor.id, ticket_id)

        if urls:
            transaction.on_commit(lambda: screenshot.cleanup_ticket_screenshots(urls))

    @staticmethod
    def attach_screenshot(*, ticket_id, actor, upload, base_url: str = '') -> str:
        """
        Store an image and append its public URL to the ticket.

        The file is validated before it is written; if the ticket is missing
        (or saving it fails) after the write, the stored file is removed again.
        """
        parse_id(ticket_id, 'ticket')
        screenshot.validate_upload(upload)

        stored = screenshot.store_upload(upload)
        try:
            with transaction.atomic():
                ticket = Ticket.objects.select_for_update().filter(id=parse_id(ticket_id, 'ticket')).first()
                if not ticket:
                    raise Http404('Ticket not found.')

                url = screenshot.public_url(stored, base_url)
                ticket.screenshots = [*(ticket.screenshots or []), url]
                ticket.save(update_fields=['screenshots', 'updated_at'])
        except Exception:
            screenshot.remove_stored([stored])
            raise

        logger.info("[screenshots] %s attached %s to ticket %s", actor.id, stored, ticket.id)
        return url
