from django.urls import path
from .views import (
    StartExamView,
    SessionQuestionsView,
    SaveAnswerView,
    SubmitExamView,
    ResultView,
    LeaderboardView,
)

urlpatterns = [
    # --- Candidate Exam Flow ---
    path('start/', StartExamView.as_view(), name='start-exam'),
    path('session/<str:session_token>/questions/', SessionQuestionsView.as_view(), name='session-questions'),
    path('session/<str:session_token>/answer/', SaveAnswerView.as_view(), name='session-answer'),
    path('session/<str:session_token>/submit/', SubmitExamView.as_view(), name='session-submit'),

    # --- Results ---
    path('result/<str:session_token>/', ResultView.as_view(), name='exam-result'),
    path('leaderboard/<str:exam_code>/', LeaderboardView.as_view(), name='exam-leaderboard'),
]
