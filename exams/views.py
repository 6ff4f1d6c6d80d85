import csv
import logging

from django.db.models import Count, F, Max, Q
from django.http import HttpResponse
from rest_framework import filters, permissions, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from assessments.leaderboard import ranked_sessions
from assessments.models import CandidateSession
from assessments.serializers import CandidateSessionSerializer
from cores.models import AuditLog

from .models import Exam, Question
from .serializers import ExamSerializer, QuestionSerializer

logger = logging.getLogger(__name__)


class ExamViewSet(viewsets.ModelViewSet):
    """Operator management of exams, their publishing state and their results."""
    serializer_class = ExamSerializer
    permission_classes = [permissions.IsAdminUser]

    # Enable search on title and code
    filter_backends = [filters.SearchFilter]
    search_fields = ['title', 'exam_code']

    def get_queryset(self):
        return Exam.objects.annotate(
            question_count=Count('questions', distinct=True),
            submission_count=Count('sessions', filter=Q(sessions__is_submitted=True), distinct=True),
        ).order_by('-created_at')

    def perform_create(self, serializer):
        exam = serializer.save()
        AuditLog.record(self.request, 'CREATE', 'Exam', exam.id, f"Created exam {exam.exam_code}: {exam.title}")

    def perform_update(self, serializer):
        exam = serializer.save()
        AuditLog.record(self.request, 'UPDATE', 'Exam', exam.id, f"Updated exam {exam.exam_code}")

    def perform_destroy(self, instance):
        # Questions, sessions and responses go with it
        AuditLog.record(self.request, 'DELETE', 'Exam', instance.id, f"Deleted exam {instance.exam_code}")
        instance.delete()

    @action(detail=True, methods=['post'], url_path='toggle-active')
    def toggle_active(self, request, pk=None):
        exam = self.get_object()
        exam.is_active = not exam.is_active
        exam.save(update_fields=['is_active'])
        AuditLog.record(request, 'UPDATE', 'Exam', exam.id, f"Set {exam.exam_code} active={exam.is_active}")
        return Response({"success": True, "is_active": exam.is_active})

    @action(detail=True, methods=['post'], url_path='publish-results')
    def publish_results(self, request, pk=None):
        return self._set_published(request, True)

    @action(detail=True, methods=['post'], url_path='unpublish-results')
    def unpublish_results(self, request, pk=None):
        return self._set_published(request, False)

    def _set_published(self, request, published):
        exam = self.get_object()
        exam.results_published = published
        exam.save(update_fields=['results_published'])
        logger.info("Results for %s %s", exam.exam_code, "published" if published else "withdrawn")
        AuditLog.record(
            request, 'PUBLISH' if published else 'UNPUBLISH', 'Exam', exam.id,
            f"Results for {exam.exam_code} {'published' if published else 'unpublished'}",
        )
        return Response({"success": True, "results_published": exam.results_published})

    @action(detail=True, methods=['get'])
    def candidates(self, request, pk=None):
        """Every attempt at this exam, best scores first."""
        exam = self.get_object()
        sessions = (
            CandidateSession.objects
            .filter(exam=exam)
            .annotate(questions_answered=Count('responses'))
            .order_by(F('score').desc(nulls_last=True), 'end_time', 'id')
        )
        return Response(CandidateSessionSerializer(sessions, many=True).data)

    @action(detail=True, methods=['get'])
    def export(self, request, pk=None):
        """CSV of submitted results in leaderboard order."""
        exam = self.get_object()

        response = HttpResponse(content_type='text/csv')
        response['Content-Disposition'] = f'attachment; filename="{exam.exam_code}-results.csv"'

        writer = csv.writer(response)
        writer.writerow(['Rank', 'Name', 'Email', 'Score', 'Total Marks', 'Percentage', 'Start Time', 'End Time'])
        for rank, session in enumerate(ranked_sessions(exam), start=1):
            writer.writerow([
                rank,
                session.name,
                session.email,
                session.score,
                session.total_marks,
                f"{session.percentage:.2f}%",
                session.start_time.isoformat(),
                session.end_time.isoformat() if session.end_time else '',
            ])
        return response


class QuestionViewSet(viewsets.ModelViewSet):
    queryset = Question.objects.select_related('exam').order_by('question_order', 'id')
    serializer_class = QuestionSerializer
    permission_classes = [permissions.IsAdminUser]

    filter_backends = [filters.SearchFilter]
    search_fields = ['question_text']

    def get_queryset(self):
        queryset = super().get_queryset()
        # Filter by Exam if provided ?exam_id=1
        exam_id = self.request.query_params.get('exam_id')
        if exam_id:
            queryset = queryset.filter(exam_id=exam_id)
        return queryset

    def perform_create(self, serializer):
        exam = serializer.validated_data['exam']
        last_order = Question.objects.filter(exam=exam).aggregate(max_order=Max('question_order'))['max_order']
        question = serializer.save(question_order=(last_order or 0) + 1)
        AuditLog.record(self.request, 'CREATE', 'Question', question.id, f"Added question to {exam.exam_code}")

    def perform_update(self, serializer):
        question = serializer.save()
        AuditLog.record(self.request, 'UPDATE', 'Question', question.id, f"Edited question in {question.exam.exam_code}")

    def perform_destroy(self, instance):
        # Recorded responses to this question are removed with it
        AuditLog.record(self.request, 'DELETE', 'Question', instance.id, f"Deleted question from {instance.exam.exam_code}")
        instance.delete()
