# pharma_core/iam/api/me.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from pharma_core.iam.models import UserProfile


class MeView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(tags=["Auth"], responses={200: dict})
    def get(self, request):
        """
        Returns the authenticated user and their profile (assigned site, if any).
        """
        profile = UserProfile.objects.select_related("assigned_site").filter(user_id=request.user.id).first()

        assigned_site = None
        if profile and profile.assigned_site:
            assigned_site = {
                "id": str(profile.assigned_site.id),
                "name": profile.assigned_site.name,
                "code": profile.assigned_site.code,
            }

        return Response(
            {
                "user": {
                    "id": request.user.id,
                    "username": getattr(request.user, "username", None),
                    "email": getattr(request.user, "email", None),
                    "is_superuser": bool(getattr(request.user, "is_superuser", False)),
                },
                "profile": {
                    "full_name": profile.full_name if profile else "",
                    "is_active": profile.is_active if profile else False,
                    "assigned_site": assigned_site,
                },
            },
            status=status.HTTP_200_OK,
        )
