# ============================================
# tracking/serializers/ticket.py
# ============================================
from rest_framework import serializers
from tracking.models import Ticket
from tracking.serializers.comment import CommentOutputSerializer


class TicketCreateSerializer(serializers.Serializer):
    # Required-ness and enum domains are checked by TicketService
    title = serializers.CharField(required=False, allow_blank=True, default='')
    description = serializers.CharField(required=False, allow_blank=True, default='')
    project = serializers.CharField(required=False, allow_blank=True, default='')
    priority = serializers.CharField(required=False, allow_null=True, default=None)


class TicketUpdateSerializer(serializers.Serializer):
    title = serializers.CharField(required=False, allow_null=True)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    status = serializers.CharField(required=False, allow_null=True)
    priority = serializers.CharField(required=False, allow_null=True)
    assignees = serializers.ListField(
        child=serializers.CharField(),
        required=False,
        allow_null=True
    )


class TicketProjectSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField()


class TicketOutputSerializer(serializers.ModelSerializer):
    project = TicketProjectSerializer(read_only=True)
    created_by = serializers.SerializerMethodField()
    assignees = serializers.SerializerMethodField()

    class Meta:
        model = Ticket
        fields = [
            'id', 'title', 'description', 'status', 'priority',
            'project', 'created_by', 'assignees', 'screenshots',
            'created_at', 'updated_at'
        ]

    def get_created_by(self, obj):
        return getattr(obj, 'created_by_data', None)

    def get_assignees(self, obj):
        return getattr(obj, 'assignees_data', [])


class TicketDetailOutputSerializer(TicketOutputSerializer):
    comments = serializers.SerializerMethodField()

    class Meta(TicketOutputSerializer.Meta):
        fields = TicketOutputSerializer.Meta.fields + ['comments']

    def get_comments(self, obj):
        return CommentOutputSerializer(getattr(obj, 'comments_data', []), many=True).data


class ScreenshotUploadSerializer(serializers.Serializer):
    screenshot = serializers.FileField()


class ScreenshotUploadedSerializer(serializers.Serializer):
    message = serializers.CharField()
    imageUrl = serializers.CharField()
