from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.core.cache import cache
from rest_framework.test import APIClient

from exams.models import Exam, Question

OPERATOR_PASSWORD = 'Str0ng-operator-pass'


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def operator(db):
    return get_user_model().objects.create_user(
        username='operator',
        email='operator@example.com',
        password=OPERATOR_PASSWORD,
        is_staff=True,
    )


@pytest.fixture
def admin_client(operator):
    client = APIClient()
    client.force_authenticate(user=operator)
    return client


@pytest.fixture
def make_exam(db):
    def _make(**overrides):
        values = {
            'title': 'General Knowledge',
            'exam_code': 'GK101',
            'duration_minutes': 30,
            'negative_marking': Decimal('0'),
            'result_mode': Exam.ResultMode.PUBLIC,
        }
        values.update(overrides)
        return Exam.objects.create(**values)
    return _make


@pytest.fixture
def make_question(db):
    def _make(exam, correct_option='A', marks=1, question_order=None, text='Which option?'):
        if question_order is None:
            question_order = exam.questions.count() + 1
        return Question.objects.create(
            exam=exam,
            question_text=text,
            option_a='Alpha',
            option_b='Bravo',
            option_c='Charlie',
            option_d='Delta',
            correct_option=correct_option,
            marks=marks,
            question_order=question_order,
        )
    return _make


@pytest.fixture
def exam(make_exam, make_question):
    """Three-question exam worth 1 + 2 + 3 marks."""
    exam = make_exam()
    make_question(exam, correct_option='A', marks=1)
    make_question(exam, correct_option='B', marks=2)
    make_question(exam, correct_option='C', marks=3)
    return exam
