# -*- coding: utf-8 -*-
from __future__ import annotations
from rest_framework import serializers


class SendOtpSerializer(serializers.Serializer):
    email = serializers.EmailField()


class VerifyOtpSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)
    otp = serializers.RegexField(r"^\d{6}$", max_length=6, error_messages={"invalid": "OTP must be 6 digits."})


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)


class UserDisplaySerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField(allow_blank=True)
    email = serializers.EmailField()


class TokenResponseSerializer(serializers.Serializer):
    token = serializers.CharField()
    user = UserDisplaySerializer()
