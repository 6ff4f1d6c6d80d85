from django.contrib import admin

from .models import AnswerResponse, CandidateSession


class AnswerResponseInline(admin.TabularInline):
    model = AnswerResponse
    extra = 0
    readonly_fields = ['question', 'selected_option', 'is_correct', 'marks_obtained', 'answered_at']


@admin.register(CandidateSession)
class CandidateSessionAdmin(admin.ModelAdmin):
    list_display = ['email', 'name', 'exam', 'is_submitted', 'score', 'total_marks', 'start_time']
    list_filter = ['is_submitted', 'exam']
    search_fields = ['email', 'name']
    # Scores are only ever written by the submit flow
    readonly_fields = ['session_token', 'start_time', 'end_time', 'score', 'total_marks', 'is_submitted']
    inlines = [AnswerResponseInline]
