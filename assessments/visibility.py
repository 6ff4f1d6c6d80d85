from dataclasses import dataclass

from exams.models import Exam

from .exceptions import NotSubmitted
from .models import percentage_of
from .sessions import get_session

HIDDEN_UNTIL_PUBLISHED = "Results will be published by the administrator"
HIDDEN_FROM_CANDIDATES = "Results are only visible to the administrator"


@dataclass
class ResultView:
    can_view: bool
    reason: str = ''
    name: str = ''
    exam_title: str = ''
    score: float = 0
    total_marks: int = 0
    percentage: float = 0

    def as_dict(self):
        if not self.can_view:
            return {'canView': False, 'message': self.reason}
        return {
            'canView': True,
            'name': self.name,
            'examTitle': self.exam_title,
            'score': self.score,
            'totalMarks': self.total_marks,
            'percentage': self.percentage,
        }


def resolve_visibility(session, exam=None):
    """Decides whether a submitted session's result may be shown on the candidate path."""
    exam = exam or session.exam
    if not session.is_submitted:
        raise NotSubmitted()

    mode = exam.result_mode
    if mode in (Exam.ResultMode.PRIVATE, Exam.ResultMode.PUBLIC):
        can_view, reason = True, ''
    elif mode == Exam.ResultMode.AFTER_PUBLISH:
        can_view = exam.results_published
        reason = '' if can_view else HIDDEN_UNTIL_PUBLISHED
    else:
        can_view, reason = False, HIDDEN_FROM_CANDIDATES

    if not can_view:
        return ResultView(can_view=False, reason=reason)

    return ResultView(
        can_view=True,
        name=session.name,
        exam_title=exam.title,
        score=float(session.score or 0),
        total_marks=session.total_marks,
        percentage=percentage_of(session.score, session.total_marks),
    )


def result_for_token(session_token):
    session = get_session(session_token)
    return resolve_visibility(session, session.exam)
