"""
Candidate session lifecycle: start or resume an attempt, report the time left,
and finalize the attempt into a score.
"""
import logging
import math
import random
import secrets
from dataclasses import dataclass, field
from decimal import Decimal

from django.db import IntegrityError, transaction
from django.db.models import Sum
from django.utils import timezone

from exams import store

from .exceptions import AlreadySubmitted, DuplicateAttempt, ExamInactive, ExamNotFound, SessionNotFound
from .models import AnswerResponse, CandidateSession

logger = logging.getLogger(__name__)


def generate_session_token():
    return secrets.token_urlsafe(32)


def get_session(session_token):
    session = None
    if session_token:
        session = (
            CandidateSession.objects
            .select_related('exam')
            .filter(session_token=session_token)
            .first()
        )
    if session is None:
        raise SessionNotFound()
    return session


def get_open_session(session_token):
    """Like get_session, but refuses sessions that were already submitted."""
    session = get_session(session_token)
    if session.is_submitted:
        raise AlreadySubmitted()
    return session


def _find_open_session(exam, email):
    return (
        CandidateSession.objects
        .select_related('exam')
        .filter(exam=exam, email=email, is_submitted=False)
        .first()
    )


def start_session(exam_code, candidate_name, candidate_email):
    """
    Starts a new attempt or resumes the candidate's unsubmitted one.

    Repeated calls for the same (exam, email) before submission return the
    same session: the token and start time are never regenerated.
    """
    exam = store.get_exam_by_code(exam_code)
    if exam is None:
        raise ExamNotFound()
    if not exam.is_active:
        raise ExamInactive()

    name = candidate_name.strip()
    email = candidate_email.strip().lower()

    if exam.prevent_duplicate_attempts:
        already_taken = CandidateSession.objects.filter(exam=exam, email=email, is_submitted=True).exists()
        if already_taken:
            logger.info("Refused repeat attempt at %s for %s", exam.exam_code, email)
            raise DuplicateAttempt()

    session = _find_open_session(exam, email)
    if session:
        logger.info("Resuming session %s for %s on %s", session.pk, email, exam.exam_code)
        return session

    try:
        with transaction.atomic():
            session = CandidateSession.objects.create(
                exam=exam,
                name=name,
                email=email,
                session_token=generate_session_token(),
                start_time=timezone.now(),
                total_marks=store.total_marks(exam.id),
            )
    except IntegrityError:
        # A concurrent request created the open session first; resume theirs.
        session = _find_open_session(exam, email)
        if session is None:
            raise
        logger.info("Lost creation race for %s on %s, resuming session %s", email, exam.exam_code, session.pk)
        return session

    logger.info("Started session %s for %s on %s", session.pk, email, exam.exam_code)
    return session


def remaining_seconds(session, exam=None, now=None):
    exam = exam or session.exam
    now = now or timezone.now()
    elapsed = math.floor((now - session.start_time).total_seconds())
    return max(0, exam.duration_minutes * 60 - elapsed)


@dataclass
class QuestionPaper:
    session: CandidateSession
    questions: list
    responses: dict = field(default_factory=dict)
    remaining_seconds: int = 0

    @property
    def allow_back_navigation(self):
        return self.session.exam.allow_back_navigation


def load_question_paper(session_token):
    """Questions to deliver to an in-progress session, with its saved answers."""
    session = get_open_session(session_token)
    exam = session.exam

    questions = list(store.questions_for_exam(exam.id))
    if exam.shuffle_questions:
        random.shuffle(questions)

    responses = dict(
        AnswerResponse.objects
        .filter(session=session)
        .values_list('question_id', 'selected_option')
    )

    return QuestionPaper(
        session=session,
        questions=questions,
        responses=responses,
        remaining_seconds=remaining_seconds(session, exam),
    )


def finalize(session_token):
    """
    Closes the session and writes its score.

    The score is the sum of the stored per-response marks, floored at zero.
    Submissions after the nominal duration are still accepted.
    """
    session = get_open_session(session_token)

    with transaction.atomic():
        # Answers being saved hold this lock, so the sum below sees all of them
        open_row = CandidateSession.objects.select_for_update().filter(pk=session.pk, is_submitted=False)
        if not open_row.exists():
            raise AlreadySubmitted()

        total = (
            AnswerResponse.objects
            .filter(session=session)
            .aggregate(total=Sum('marks_obtained'))['total']
        ) or Decimal('0')
        score = max(Decimal('0'), total)
        now = timezone.now()

        # Conditional write so only one concurrent submit can win
        updated = (
            CandidateSession.objects
            .filter(pk=session.pk, is_submitted=False)
            .update(is_submitted=True, end_time=now, score=score)
        )
        if not updated:
            raise AlreadySubmitted()

    session.is_submitted = True
    session.end_time = now
    session.score = score
    logger.info("Session %s submitted with score %s/%s", session.pk, score, session.total_marks)
    return session
