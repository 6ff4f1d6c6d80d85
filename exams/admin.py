from django.contrib import admin

# Register your models here.
from .models import Exam, Question


class QuestionInline(admin.TabularInline):
    model = Question
    extra = 0
    fields = ['question_order', 'question_text', 'correct_option', 'marks']


@admin.register(Exam)
class ExamAdmin(admin.ModelAdmin):
    list_display = ['exam_code', 'title', 'result_mode', 'is_active', 'results_published']
    list_filter = ['result_mode', 'is_active', 'results_published']
    search_fields = ['exam_code', 'title']
    inlines = [QuestionInline]


admin.site.register(Question)
