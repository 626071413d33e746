# -*- coding: utf-8 -*-
from __future__ import annotations
from rest_framework import serializers, status
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema, extend_schema_view, OpenApiResponse, inline_serializer

from accounts.serializers.auth_serializer import (
    SendOtpSerializer,
    VerifyOtpSerializer,
    LoginSerializer,
    TokenResponseSerializer,
)
from accounts.services import auth_service, otp_service

MessageSerializer = inline_serializer(name="Message", fields={"message": serializers.CharField()})


def _token_payload(user, token) -> dict:
    return {"token": token, "user": user.display()}


@extend_schema_view(
    post=extend_schema(
        tags=["Auth"],
        summary="Log in with email + password",
        request=LoginSerializer,
        responses={200: TokenResponseSerializer, 400: OpenApiResponse(description="Invalid credentials")},
    )
)
class LoginView(APIView):
    authentication_classes = []
    permission_classes = []

    def post(self, request):
        ser = LoginSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        user, token = auth_service.login(**ser.validated_data)
        return Response(_token_payload(user, token))


@extend_schema_view(
    post=extend_schema(
        tags=["Auth"],
        summary="Send a one-time code to an email",
        description="Issues a 6-digit code valid for 10 minutes. Re-sending replaces the previous code.",
        request=SendOtpSerializer,
        responses={200: MessageSerializer, 500: OpenApiResponse(description="Failed to send OTP")},
    )
)
class SendOtpView(APIView):
    authentication_classes = []
    permission_classes = []

    def post(self, request):
        ser = SendOtpSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        if not otp_service.send_otp(ser.validated_data["email"]):
            return Response({"detail": "Failed to send OTP"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response({"message": "OTP sent successfully"})


@extend_schema_view(
    post=extend_schema(
        tags=["Auth"],
        summary="Verify a one-time code and register",
        request=VerifyOtpSerializer,
        responses={201: TokenResponseSerializer, 400: OpenApiResponse(description="Invalid or expired OTP / User already exists")},
    )
)
class VerifyOtpView(APIView):
    authentication_classes = []
    permission_classes = []

    def post(self, request):
        ser = VerifyOtpSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        user, token = otp_service.verify_otp_and_register(**ser.validated_data)
        return Response(_token_payload(user, token), status=status.HTTP_201_CREATED)
