from __future__ import annotations

from django.contrib import admin

from pharma_core.iam.models import UserProfile


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "full_name", "assigned_site", "is_active", "created_at")
    list_filter = ("assigned_site", "is_active")
    search_fields = ("user__username", "user__email", "full_name")
    ordering = ("-created_at",)
