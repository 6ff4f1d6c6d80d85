from rest_framework import serializers

from exams.models import Question
from exams.serializers import CandidateQuestionSerializer

from .models import AnswerResponse, CandidateSession

# --- Candidate exam flow ---

class StartExamSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, trim_whitespace=True)
    email = serializers.EmailField(error_messages={'invalid': "Please enter a valid email address"})
    exam_code = serializers.CharField(max_length=50, trim_whitespace=True)


class SaveAnswerSerializer(serializers.Serializer):
    questionId = serializers.IntegerField()
    selectedOption = serializers.CharField(required=False, allow_null=True, allow_blank=True, max_length=1)

    def validate_selectedOption(self, value):
        if value and value.strip().upper() not in Question.Choice.values:
            raise serializers.ValidationError("Selected option must be one of A, B, C or D.")
        return value


def question_paper_payload(paper):
    return {
        'questions': CandidateQuestionSerializer(paper.questions, many=True).data,
        'responses': {str(question_id): option for question_id, option in paper.responses.items()},
        'remainingSeconds': paper.remaining_seconds,
        'allowBackNavigation': paper.allow_back_navigation,
    }

# --- Operator result review ---

class CandidateSessionSerializer(serializers.ModelSerializer):
    """Lightweight serializer for result lists."""
    percentage = serializers.FloatField(read_only=True)
    questions_answered = serializers.IntegerField(read_only=True)
    status = serializers.SerializerMethodField()

    class Meta:
        model = CandidateSession
        fields = [
            'id', 'exam', 'name', 'email', 'session_token', 'start_time', 'end_time',
            'score', 'total_marks', 'percentage', 'is_submitted', 'questions_answered', 'status',
        ]
        read_only_fields = fields

    def get_status(self, obj):
        if obj.is_submitted:
            return "completed"
        return "in_progress"


class AnswerResponseDetailSerializer(serializers.ModelSerializer):
    question_text = serializers.CharField(source='question.question_text', read_only=True)
    option_a = serializers.CharField(source='question.option_a', read_only=True)
    option_b = serializers.CharField(source='question.option_b', read_only=True)
    option_c = serializers.CharField(source='question.option_c', read_only=True)
    option_d = serializers.CharField(source='question.option_d', read_only=True)
    correct_option = serializers.CharField(source='question.correct_option', read_only=True)
    marks = serializers.IntegerField(source='question.marks', read_only=True)

    class Meta:
        model = AnswerResponse
        fields = [
            'id', 'question', 'question_text',
            'option_a', 'option_b', 'option_c', 'option_d', 'correct_option', 'marks',
            'selected_option', 'is_correct', 'marks_obtained', 'answered_at',
        ]


class CandidateDetailSerializer(CandidateSessionSerializer):
    """Heavy serializer for a single attempt. Includes every graded response."""
    exam_title = serializers.CharField(source='exam.title', read_only=True)
    exam_code = serializers.CharField(source='exam.exam_code', read_only=True)
    responses = serializers.SerializerMethodField()

    class Meta(CandidateSessionSerializer.Meta):
        fields = CandidateSessionSerializer.Meta.fields + ['exam_title', 'exam_code', 'responses']
        read_only_fields = fields

    def get_responses(self, obj):
        responses = (
            obj.responses
            .select_related('question')
            .order_by('question__question_order', 'question__id')
        )
        return AnswerResponseDetailSerializer(responses, many=True).data
