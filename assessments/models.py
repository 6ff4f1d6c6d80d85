# assessments/models.py
from django.db import models

from exams.models import Exam, Question


class CandidateSession(models.Model):
    """Tracks a candidate's specific attempt at an exam."""
    exam = models.ForeignKey(Exam, related_name='sessions', on_delete=models.CASCADE)
    name = models.CharField(max_length=255)
    email = models.EmailField()  # Stored lowercase, used to detect repeat attempts

    session_token = models.CharField(max_length=64, unique=True)
    start_time = models.DateTimeField()
    end_time = models.DateTimeField(null=True, blank=True)  # When they submitted

    # Written once, at finalization
    score = models.DecimalField(max_digits=8, decimal_places=2, null=True, blank=True)
    # Snapshot of the exam's marks at creation time
    total_marks = models.PositiveIntegerField(default=0)
    is_submitted = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['exam', 'email'], name='session_exam_email_idx'),
            models.Index(fields=['exam', 'is_submitted'], name='session_exam_submitted_idx'),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['exam', 'email'],
                condition=models.Q(is_submitted=False),
                name='unique_open_session_per_candidate',
            ),
        ]

    @property
    def percentage(self):
        return percentage_of(self.score, self.total_marks)

    def __str__(self):
        return f"{self.email} - {self.exam.title}"


class AnswerResponse(models.Model):
    session = models.ForeignKey(CandidateSession, related_name='responses', on_delete=models.CASCADE)
    question = models.ForeignKey(Question, related_name='responses', on_delete=models.CASCADE)

    # Null means the candidate cleared their answer
    selected_option = models.CharField(max_length=1, null=True, blank=True)
    is_correct = models.BooleanField(default=False)
    marks_obtained = models.DecimalField(max_digits=7, decimal_places=2, default=0)
    answered_at = models.DateTimeField()

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=['session', 'question'],
                name='unique_response_per_question',
            ),
        ]

    def __str__(self):
        return f"{self.session_id}:{self.question_id} -> {self.selected_option or '-'}"


def percentage_of(score, total_marks):
    if not total_marks or score is None:
        return 0
    return round(float(score) / total_marks * 100, 2)
