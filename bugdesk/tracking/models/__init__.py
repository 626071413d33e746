# ============================================
# tracking/models/__init__.py
# ============================================
from .project import Project, ProjectMember, ProjectRole
from .ticket import Ticket
from .comment import TicketComment

__all__ = [
    'Project',
    'ProjectMember',
    'ProjectRole',
    'Ticket',
    'TicketComment',
]
