from django.contrib import admin
from django.urls import path, include
from rest_framework.routers import DefaultRouter

# Import Views
from exams.views import ExamViewSet, QuestionViewSet
from assessments.views import CandidateSessionViewSet, AdminStatsView

# Router
router = DefaultRouter()
router.register(r'exams', ExamViewSet, basename='exams')
router.register(r'questions', QuestionViewSet, basename='questions')
router.register(r'candidates', CandidateSessionViewSet, basename='candidates')

urlpatterns = [
    path('admin/', admin.site.urls),

    # --- Operator Authentication ---
    path('api/auth/', include('users.urls')),

    # --- Candidate Exam Flow ---
    path('api/exam/', include('assessments.urls')),

    # --- Site Settings & Audit Logs ---
    path('api/', include('cores.urls')),

    # --- Admin Dashboard Stats ---
    path('api/admin/stats/', AdminStatsView.as_view(), name='admin-stats'),

    # --- Operator Exam, Question & Result Management ---
    path('api/admin/', include(router.urls)),
]
