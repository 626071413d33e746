# -*- coding: utf-8 -*-
from __future__ import annotations
from django.urls import re_path

from accounts.views.auth_view import LoginView, SendOtpView, VerifyOtpView

app_name = "auth"

urlpatterns = [
    re_path(r"^login/?$", LoginView.as_view(), name="login"),
    re_path(r"^send-otp/?$", SendOtpView.as_view(), name="send-otp"),
    re_path(r"^verify-otp/?$", VerifyOtpView.as_view(), name="verify-otp"),
]
