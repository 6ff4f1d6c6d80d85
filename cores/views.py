from rest_framework import generics, permissions
from rest_framework.views import APIView
from rest_framework.response import Response
from .models import SiteSetting, AuditLog
from .serializers import SiteSettingSerializer, AuditLogSerializer

class SiteSettingView(APIView):
    """Portal branding. Anyone may read it (landing page); only operators change it."""

    def get_permissions(self):
        if self.request.method == 'GET':
            return [permissions.AllowAny()]
        return [permissions.IsAdminUser()]

    def get(self, request):
        serializer = SiteSettingSerializer(SiteSetting.load())
        return Response(serializer.data)

    def put(self, request):
        site_settings = SiteSetting.load()
        serializer = SiteSettingSerializer(site_settings, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        AuditLog.record(request, 'SETTINGS', 'SiteSetting', details='Updated portal branding')
        return Response({"success": True, **serializer.data})

class AuditLogListView(generics.ListAPIView):
    """Operator activity, newest first. Narrow with ?action=, ?target_model= or ?target_id=."""
    serializer_class = AuditLogSerializer
    permission_classes = [permissions.IsAdminUser]
    filter_params = {
        'action': 'action',
        'target_model': 'target_model__iexact',
        'target_id': 'target_object_id',
    }

    def get_queryset(self):
        logs = AuditLog.objects.select_related('actor').order_by('-timestamp', '-id')
        lookups = {
            lookup: self.request.query_params[param]
            for param, lookup in self.filter_params.items()
            if self.request.query_params.get(param)
        }
        return logs.filter(**lookups)
