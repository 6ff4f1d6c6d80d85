from dataclasses import dataclass

from exams import store
from exams.models import Exam

from .exceptions import ExamNotFound, LeaderboardUnavailable
from .models import CandidateSession, percentage_of


@dataclass(frozen=True)
class LeaderboardEntry:
    rank: int
    name: str
    score: float
    total_marks: int
    percentage: float

    def as_dict(self):
        return {
            'rank': self.rank,
            'name': self.name,
            'score': self.score,
            'totalMarks': self.total_marks,
            'percentage': self.percentage,
        }


def leaderboard_available(exam):
    if exam.result_mode == Exam.ResultMode.PUBLIC:
        return True
    return exam.result_mode == Exam.ResultMode.AFTER_PUBLISH and exam.results_published


def ranked_sessions(exam):
    """Submitted sessions, best score first, earlier finishers ahead on ties."""
    return (
        CandidateSession.objects
        .filter(exam=exam, is_submitted=True)
        .order_by('-score', 'end_time', 'id')
    )


def rank(exam):
    if not leaderboard_available(exam):
        raise LeaderboardUnavailable()

    return [
        LeaderboardEntry(
            rank=position,
            name=session.name,
            score=float(session.score or 0),
            total_marks=session.total_marks,
            percentage=percentage_of(session.score, session.total_marks),
        )
        for position, session in enumerate(ranked_sessions(exam), start=1)
    ]


def leaderboard_for_code(exam_code):
    exam = store.get_exam_by_code(exam_code)
    if exam is None:
        raise ExamNotFound("Exam not found")
    return exam, rank(exam)
