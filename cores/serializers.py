from rest_framework import serializers
from .models import SiteSetting, AuditLog

class SiteSettingSerializer(serializers.ModelSerializer):
    class Meta:
        model = SiteSetting
        fields = [
            'portal_title', 'portal_subtitle',
            'company_name', 'company_logo', 'company_website',
            'institute_name', 'institute_logo',
            'footer_text', 'updated_at',
        ]
        read_only_fields = ['updated_at']

class AuditLogSerializer(serializers.ModelSerializer):
    actor_username = serializers.CharField(source='actor.username', read_only=True)

    class Meta:
        model = AuditLog
        fields = ['id', 'actor', 'actor_username', 'action', 'target_model', 'target_object_id', 'ip_address', 'timestamp', 'details']
