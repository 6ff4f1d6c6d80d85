import logging
from decimal import Decimal

from django.db import IntegrityError, transaction
from django.utils import timezone

from exams import store

from .exceptions import AlreadySubmitted, InvalidQuestion
from .models import AnswerResponse, CandidateSession
from .sessions import get_open_session

logger = logging.getLogger(__name__)


def grade(question, exam, selected_option):
    """
    Returns (selected_option, is_correct, marks_obtained) for one answer.

    Wrong answers lose the exam's flat negative marking, regardless of the
    question's own marks. A blank answer is worth nothing either way.
    """
    selected = (selected_option or '').strip().upper() or None
    is_correct = selected is not None and selected == question.correct_option

    marks = Decimal('0')
    if selected is not None:
        if is_correct:
            marks = Decimal(question.marks)
        elif exam.negative_marking > 0:
            marks = -Decimal(exam.negative_marking)

    return selected, is_correct, marks


def record_answer(session_token, question_id, selected_option):
    """
    Saves the candidate's current answer for a question.

    Re-answering replaces the earlier grading entirely; the session score
    itself is only computed on submit.
    """
    session = get_open_session(session_token)
    exam = session.exam

    with transaction.atomic():
        # Holds the row against a concurrent submit until the answer is stored
        if not CandidateSession.objects.select_for_update().filter(pk=session.pk, is_submitted=False).exists():
            raise AlreadySubmitted()

        question = store.question_in_exam(question_id, exam.id)
        if question is None:
            raise InvalidQuestion()

        selected, is_correct, marks = grade(question, exam, selected_option)
        values = {
            'selected_option': selected,
            'is_correct': is_correct,
            'marks_obtained': marks,
            'answered_at': timezone.now(),
        }

        try:
            with transaction.atomic():
                response, _ = AnswerResponse.objects.update_or_create(
                    session=session, question=question, defaults=values,
                )
        except IntegrityError:
            # Another save for the same question inserted first; last write wins.
            AnswerResponse.objects.filter(session=session, question=question).update(**values)
            response = AnswerResponse.objects.get(session=session, question=question)

    logger.debug("Session %s answered question %s with %s (%s)", session.pk, question.pk, selected, marks)
    return response
