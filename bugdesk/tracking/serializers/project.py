# ============================================
# tracking/serializers/project.py
# ============================================
from rest_framework import serializers
from tracking.models import Project


class ProjectCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True, default='')


class AddMembersSerializer(serializers.Serializer):
    # Entries are validated as a batch by ProjectService.add_members
    newMembers = serializers.JSONField(required=False, default=None)


class ProjectOutputSerializer(serializers.ModelSerializer):
    created_by = serializers.SerializerMethodField()
    members = serializers.SerializerMethodField()

    class Meta:
        model = Project
        fields = [
            'id', 'name', 'description',
            'created_by', 'members', 'created_at', 'updated_at'
        ]

    def get_created_by(self, obj):
        return getattr(obj, 'owner_data', None)

    def get_members(self, obj):
        return getattr(obj, 'members_data', [])


class MembersAddedSerializer(serializers.Serializer):
    message = serializers.CharField()
    project = ProjectOutputSerializer()
