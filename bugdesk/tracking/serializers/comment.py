# ============================================
# tracking/serializers/comment.py
# ============================================
from rest_framework import serializers
from tracking.models import TicketComment


class CommentCreateSerializer(serializers.Serializer):
    text = serializers.CharField(required=False, allow_blank=True, default='', trim_whitespace=False)


class CommentOutputSerializer(serializers.ModelSerializer):
    author = serializers.SerializerMethodField()

    class Meta:
        model = TicketComment
        fields = ['id', 'text', 'author', 'created_at']

    def get_author(self, obj):
        return getattr(obj, 'author_data', None)
