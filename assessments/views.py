from django.db.models import Count
from rest_framework import mixins, permissions, status, views, viewsets
from rest_framework.response import Response

from cores.models import AuditLog
from exams.models import Exam, Question
from exams.serializers import ExamListSerializer

from . import leaderboard, scoring, sessions, visibility
from .models import CandidateSession
from .serializers import (
    CandidateDetailSerializer,
    SaveAnswerSerializer,
    StartExamSerializer,
    question_paper_payload,
)


# --- CANDIDATE VIEWS ---

class CandidateAPIView(views.APIView):
    """Candidates are identified by their session token, not by an account."""
    authentication_classes = []
    permission_classes = [permissions.AllowAny]


class StartExamView(CandidateAPIView):
    """
    Candidate enters name, email and exam code.
    Creates a session, or resumes the one still in progress.
    """

    def post(self, request):
        serializer = StartExamSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        session = sessions.start_session(data['exam_code'], data['name'], data['email'])
        exam = session.exam

        return Response({
            "success": True,
            "sessionToken": session.session_token,
            "examTitle": exam.title,
            "examCode": exam.exam_code,
            "duration": exam.duration_minutes,
            "allowBackNavigation": exam.allow_back_navigation,
            "resultMode": exam.result_mode,
            "startTime": session.start_time,
        })


class SessionQuestionsView(CandidateAPIView):
    """Question paper for an in-progress session (answer key stripped)."""

    def get(self, request, session_token):
        paper = sessions.load_question_paper(session_token)
        return Response(question_paper_payload(paper))


class SaveAnswerView(CandidateAPIView):

    def post(self, request, session_token):
        serializer = SaveAnswerSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        scoring.record_answer(
            session_token,
            serializer.validated_data['questionId'],
            serializer.validated_data.get('selectedOption'),
        )
        return Response({"success": True})


class SubmitExamView(CandidateAPIView):
    """Closes the attempt. A second submit fails instead of re-scoring."""

    def post(self, request, session_token):
        sessions.finalize(session_token)
        return Response({"success": True, "message": "Exam submitted successfully"})


class ResultView(CandidateAPIView):

    def get(self, request, session_token):
        result = visibility.result_for_token(session_token)
        return Response({"success": True, **result.as_dict()})


class LeaderboardView(CandidateAPIView):

    def get(self, request, exam_code):
        exam, entries = leaderboard.leaderboard_for_code(exam_code)
        return Response({
            "success": True,
            "examTitle": exam.title,
            "leaderboard": [entry.as_dict() for entry in entries],
        })


# --- ADMIN VIEWS ---

class CandidateSessionViewSet(mixins.RetrieveModelMixin,
                              mixins.DestroyModelMixin,
                              viewsets.GenericViewSet):
    """Operator look at (or removal of) a single candidate attempt."""
    permission_classes = [permissions.IsAdminUser]
    serializer_class = CandidateDetailSerializer

    def get_queryset(self):
        return (
            CandidateSession.objects
            .select_related('exam')
            .annotate(questions_answered=Count('responses'))
        )

    def perform_destroy(self, instance):
        AuditLog.record(
            self.request, 'DELETE', 'CandidateSession', instance.id,
            f"Deleted attempt by {instance.email} on {instance.exam.exam_code}",
        )
        instance.delete()

    def destroy(self, request, *args, **kwargs):
        super().destroy(request, *args, **kwargs)
        return Response({"success": True}, status=status.HTTP_200_OK)


class AdminStatsView(views.APIView):
    """
    Returns aggregated statistics for the Admin Dashboard.
    """
    permission_classes = [permissions.IsAdminUser]

    def get(self, request):
        submitted = CandidateSession.objects.filter(is_submitted=True)
        recent_exams = list(Exam.objects.order_by('-created_at')[:5])
        submissions_by_exam = dict(
            submitted.filter(exam__in=recent_exams)
            .order_by()
            .values_list('exam')
            .annotate(count=Count('id'))
        )

        recent = []
        for exam in recent_exams:
            row = ExamListSerializer(exam).data
            row['submissions'] = submissions_by_exam.get(exam.id, 0)
            recent.append(row)

        return Response({
            "total_exams": Exam.objects.count(),
            "active_exams": Exam.objects.filter(is_active=True).count(),
            "total_questions": Question.objects.count(),
            "total_submissions": submitted.count(),
            "recent_exams": recent,
        })

