from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView
from .views import OperatorLoginView, ChangePasswordView, UserProfileView

urlpatterns = [
    # --- Authentication ---
    path('login/', OperatorLoginView.as_view(), name='login'),
    path('refresh/', TokenRefreshView.as_view(), name='token-refresh'),
    path('change-password/', ChangePasswordView.as_view(), name='change-password'),

    path('profile/', UserProfileView.as_view(), name='user-profile'),
]
