# -*- coding: utf-8 -*-
from __future__ import annotations
from django.urls import re_path

from accounts.views.user_view import UserSearchView

app_name = "users"

urlpatterns = [
    re_path(r"^search/?$", UserSearchView.as_view(), name="search"),
]
