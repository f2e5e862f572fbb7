# pharma_core/iam/models.py
import uuid

from django.conf import settings
from django.db import models

from pharma_core.sites.models import Site


class UserProfile(models.Model):
    """
    Network user profile anchored to Django's AUTH_USER_MODEL.
    The assigned site is the one the user operates from by default.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="pharma_profile")
    full_name = models.CharField(max_length=255, blank=True, default="")
    assigned_site = models.ForeignKey(
        Site,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="user_profiles",
    )
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "iam_user_profile"
        indexes = [
            models.Index(fields=["assigned_site", "is_active"], name="iam_profile_site_active_idx"),
        ]

    def __str__(self) -> str:
        return self.full_name or self.user.get_username()
