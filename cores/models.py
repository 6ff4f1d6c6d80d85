from django.conf import settings
from django.core.cache import cache
from django.db import models


class SiteSetting(models.Model):
    # --- Portal Branding ---
    portal_title = models.CharField(max_length=200, default="Exam Portal")
    portal_subtitle = models.CharField(max_length=255, default="Enter your details to begin")

    company_name = models.CharField(max_length=200, blank=True)
    company_logo = models.URLField(max_length=500, blank=True)
    company_website = models.URLField(max_length=500, blank=True)

    institute_name = models.CharField(max_length=200, blank=True)
    institute_logo = models.URLField(max_length=500, blank=True)

    footer_text = models.TextField(blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    def save(self, *args, **kwargs):
        self.pk = 1  # Singleton pattern
        super().save(*args, **kwargs)
        cache.set('site_settings', self)

    def delete(self, *args, **kwargs):
        pass

    @classmethod
    def load(cls):
        obj = cache.get('site_settings')
        if obj is None:
            obj, created = cls.objects.get_or_create(pk=1)
            cache.set('site_settings', obj)
        return obj

    def __str__(self):
        return "Site Settings"


class AuditLog(models.Model):
    ACTION_CHOICES = [
        ('CREATE', 'Create'),
        ('UPDATE', 'Update'),
        ('DELETE', 'Delete'),
        ('LOGIN', 'Login'),
        ('PUBLISH', 'Results Published'),
        ('UNPUBLISH', 'Results Unpublished'),
        ('SETTINGS', 'Settings Changed'),
    ]

    actor = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, related_name='audit_logs')
    action = models.CharField(max_length=20, choices=ACTION_CHOICES)
    target_model = models.CharField(max_length=50, help_text="e.g., Exam, Question, CandidateSession")
    target_object_id = models.CharField(max_length=100, blank=True, null=True)
    details = models.TextField(blank=True, help_text="Description of changes")
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    timestamp = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-timestamp']

    @classmethod
    def record(cls, request, action, target_model, target_object_id=None, details=''):
        from .ratelimit import client_ip

        user = getattr(request, 'user', None)
        return cls.objects.create(
            actor=user if user is not None and user.is_authenticated else None,
            action=action,
            target_model=target_model,
            target_object_id=str(target_object_id) if target_object_id is not None else None,
            details=details,
            ip_address=client_ip(request),
        )

    def __str__(self):
        return f"{self.actor} - {self.action} - {self.timestamp}"
