# -*- coding: utf-8 -*-
from __future__ import annotations
from rest_framework import serializers


class UserSearchQuerySerializer(serializers.Serializer):
    email = serializers.CharField(required=False, allow_blank=True, default="")
    projectId = serializers.CharField(required=False, allow_blank=True, default="")
