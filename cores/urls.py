from django.urls import path
from .views import SiteSettingView, AuditLogListView

urlpatterns = [
    path('site-settings/', SiteSettingView.as_view(), name='site-settings'),
    path('admin/audit-logs/', AuditLogListView.as_view(), name='audit-logs'),
]
