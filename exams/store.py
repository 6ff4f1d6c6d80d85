"""Read-only lookups over exam definitions used by the exam flow."""
from django.db.models import Sum

from .models import Exam, Question


def get_exam_by_code(exam_code):
    """Case-insensitive exam lookup. Returns None for unknown codes."""
    if not exam_code:
        return None
    return Exam.objects.filter(exam_code=exam_code.strip().upper()).first()


def questions_for_exam(exam_id):
    return Question.objects.filter(exam_id=exam_id).order_by('question_order', 'id')


def total_marks(exam_id):
    return Question.objects.filter(exam_id=exam_id).aggregate(total=Sum('marks'))['total'] or 0


def question_in_exam(question_id, exam_id):
    return Question.objects.filter(id=question_id, exam_id=exam_id).first()
