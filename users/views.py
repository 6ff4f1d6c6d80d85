import logging
import math

from rest_framework import exceptions, generics, permissions
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.views import TokenObtainPairView

from cores.models import AuditLog
from cores.ratelimit import LoginRateLimiter, client_ip

from .serializers import ChangePasswordSerializer, OperatorTokenObtainPairSerializer, UserSerializer

logger = logging.getLogger(__name__)


# --- Authentication Views ---
class OperatorLoginView(TokenObtainPairView):
    """JWT login for operators, locked out after repeated failures from one address."""
    serializer_class = OperatorTokenObtainPairSerializer
    rate_limiter_class = LoginRateLimiter

    def get_rate_limiter(self):
        return self.rate_limiter_class()

    def post(self, request, *args, **kwargs):
        limiter = self.get_rate_limiter()
        ip = client_ip(request)

        wait = limiter.retry_after(ip)
        if wait:
            minutes = math.ceil(wait / 60)
            raise exceptions.Throttled(
                detail=f"Too many login attempts. Please try again in {minutes} minutes."
            )

        try:
            response = super().post(request, *args, **kwargs)
        except exceptions.AuthenticationFailed:
            limiter.record_failure(ip)
            logger.info("Failed operator login from %s", ip)
            raise

        limiter.clear(ip)
        user = response.data.get('user', {})
        AuditLog.objects.create(
            actor_id=user.get('id'),
            action='LOGIN',
            target_model='User',
            target_object_id=str(user.get('id')),
            details=f"Operator {user.get('username')} signed in",
            ip_address=ip,
        )
        return response


class ChangePasswordView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):
        serializer = ChangePasswordSerializer(data=request.data, context={'request': request})
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response({"success": True, "message": "Password changed successfully"})


class UserProfileView(generics.RetrieveUpdateAPIView):
    serializer_class = UserSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_object(self):
        return self.request.user
