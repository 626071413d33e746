# ============================================
# tracking/selectors/comment.py
# ============================================
from typing import List

from django.db.models import QuerySet

from accounts.selectors.user_selector import get_users_map
from tracking.models import TicketComment


class CommentSelector:

    @staticmethod
    def get_comments_by_ticket(ticket_id) -> QuerySet:
        """Get all comments for a ticket, oldest first"""
        return TicketComment.objects.filter(ticket_id=ticket_id).order_by('created_at', 'id')

    @staticmethod
    def enrich_comments_with_users(comments: List[TicketComment]) -> List[TicketComment]:
        """Fetch and attach user data to comments"""
        comments = list(comments)
        users_dict = get_users_map({c.author_id for c in comments})

        for comment in comments:
            comment.author_data = users_dict.get(str(comment.author_id))

        return comments
