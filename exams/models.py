# mcq_platform/exams/models.py
from django.core.validators import MinValueValidator
from django.db import models


class Exam(models.Model):
    class ResultMode(models.TextChoices):
        PRIVATE = "private", "Candidate only"
        PUBLIC = "public", "Public"
        AFTER_PUBLISH = "after_publish", "After publishing"
        ADMIN_ONLY = "admin_only", "Administrator only"

    title = models.CharField(max_length=255)
    # Always stored uppercase so lookups are case-insensitive
    exam_code = models.CharField(max_length=50, unique=True)
    description = models.TextField(blank=True)

    duration_minutes = models.PositiveIntegerField(default=30, validators=[MinValueValidator(1)])
    marks_per_question = models.PositiveIntegerField(default=1)
    negative_marking = models.DecimalField(
        max_digits=5, decimal_places=2, default=0,
        validators=[MinValueValidator(0)],
        help_text="Flat deduction per wrong answer. 0 disables negative marking.",
    )
    result_mode = models.CharField(max_length=20, choices=ResultMode.choices, default=ResultMode.ADMIN_ONLY)

    allow_back_navigation = models.BooleanField(default=True)
    shuffle_questions = models.BooleanField(default=False)
    prevent_duplicate_attempts = models.BooleanField(default=True)
    is_active = models.BooleanField(default=True)
    results_published = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        constraints = [
            models.CheckConstraint(
                condition=models.Q(negative_marking__gte=0),
                name='exam_negative_marking_non_negative',
            ),
        ]

    def save(self, *args, **kwargs):
        if self.exam_code:
            self.exam_code = self.exam_code.strip().upper()
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.exam_code} - {self.title}"


class Question(models.Model):
    class Choice(models.TextChoices):
        A = "A", "Option A"
        B = "B", "Option B"
        C = "C", "Option C"
        D = "D", "Option D"

    exam = models.ForeignKey(Exam, related_name='questions', on_delete=models.CASCADE)

    question_text = models.TextField()
    option_a = models.TextField()
    option_b = models.TextField()
    option_c = models.TextField()
    option_d = models.TextField()
    correct_option = models.CharField(max_length=1, choices=Choice.choices)

    marks = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    question_order = models.PositiveIntegerField(null=True, blank=True)

    class Meta:
        ordering = ['question_order', 'id']
        indexes = [
            models.Index(fields=['exam', 'question_order'], name='question_exam_order_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(correct_option__in=['A', 'B', 'C', 'D']),
                name='question_correct_option_valid',
            ),
        ]

    def save(self, *args, **kwargs):
        if self.correct_option:
            self.correct_option = self.correct_option.strip().upper()
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.question_text[:50]}..."
