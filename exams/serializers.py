# mcq_platform/exams/serializers.py
from rest_framework import serializers

from .models import Exam, Question

# --- Question Serializers ---

class QuestionSerializer(serializers.ModelSerializer):
    """Operator view of a question, including the answer key."""
    exam_title = serializers.CharField(source='exam.title', read_only=True)
    # Plain text so lowercase input can be normalized below
    correct_option = serializers.CharField(max_length=1)

    class Meta:
        model = Question
        fields = [
            'id', 'exam', 'exam_title', 'question_text',
            'option_a', 'option_b', 'option_c', 'option_d',
            'correct_option', 'marks', 'question_order',
        ]
        read_only_fields = ['question_order']

    def validate_correct_option(self, value):
        value = (value or '').strip().upper()
        if value not in Question.Choice.values:
            raise serializers.ValidationError("Correct option must be one of A, B, C or D.")
        return value

    def validate_exam(self, value):
        # Moving a question to another exam would corrupt recorded responses
        if self.instance is not None and value != self.instance.exam:
            raise serializers.ValidationError("A question cannot be moved to another exam.")
        return value


class CandidateQuestionSerializer(serializers.ModelSerializer):
    """What a candidate sees while sitting the exam. Never exposes the answer."""
    class Meta:
        model = Question
        fields = [
            'id', 'question_text',
            'option_a', 'option_b', 'option_c', 'option_d',
            'marks', 'question_order',
        ]

# --- Exam Serializers ---

class ExamSerializer(serializers.ModelSerializer):
    # Read-only counts (annotated by the viewset)
    question_count = serializers.IntegerField(read_only=True)
    submission_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = Exam
        fields = [
            'id', 'title', 'exam_code', 'description',
            'duration_minutes', 'marks_per_question', 'negative_marking', 'result_mode',
            'allow_back_navigation', 'shuffle_questions', 'prevent_duplicate_attempts',
            'is_active', 'results_published', 'created_at',
            'question_count', 'submission_count',
        ]
        read_only_fields = ['results_published', 'created_at']
        # Uniqueness is checked against the normalized code in validate_exam_code
        extra_kwargs = {'exam_code': {'validators': []}}

    def validate_exam_code(self, value):
        code = value.strip().upper()
        if not code:
            raise serializers.ValidationError("Exam code is required.")
        clash = Exam.objects.filter(exam_code=code)
        if self.instance is not None:
            clash = clash.exclude(pk=self.instance.pk)
        if clash.exists():
            raise serializers.ValidationError("Exam code already exists")
        return code


class ExamListSerializer(serializers.ModelSerializer):
    class Meta:
        model = Exam
        fields = ['id', 'title', 'exam_code', 'duration_minutes', 'is_active', 'created_at']
