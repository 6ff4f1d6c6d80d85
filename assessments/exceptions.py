from rest_framework import status
from rest_framework.exceptions import APIException


class ExamFlowError(APIException):
    """Base class for expected failures in the candidate exam flow."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "The exam request could not be completed."
    default_code = "exam_flow_error"


class ExamNotFound(ExamFlowError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Invalid exam code or exam is not active"
    default_code = "exam_not_found"


class ExamInactive(ExamNotFound):
    default_code = "exam_inactive"


class DuplicateAttempt(ExamFlowError):
    default_detail = "You have already taken this exam"
    default_code = "duplicate_attempt"


class SessionNotFound(ExamFlowError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Session not found. Please start again."
    default_code = "session_not_found"


class AlreadySubmitted(ExamFlowError):
    default_detail = "Exam already submitted"
    default_code = "already_submitted"


class InvalidQuestion(ExamFlowError):
    default_detail = "Invalid question"
    default_code = "invalid_question"


class NotSubmitted(ExamFlowError):
    default_detail = "Exam not yet submitted"
    default_code = "not_submitted"


class LeaderboardUnavailable(ExamFlowError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Leaderboard not available for this exam"
    default_code = "leaderboard_unavailable"


class StorageError(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Server error. Please try again."
    default_code = "storage_error"
