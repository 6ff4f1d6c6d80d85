import csv
import io

import pytest
from django.urls import reverse

from assessments import scoring, sessions
from assessments.models import AnswerResponse, CandidateSession
from cores.models import AuditLog, SiteSetting
from exams.models import Exam, Question

pytestmark = pytest.mark.django_db


EXAM_PAYLOAD = {
    'title': 'Physics Midterm',
    'exam_code': 'phy-01',
    'description': 'Mechanics',
    'duration_minutes': 45,
    'negative_marking': '0.25',
    'result_mode': 'after_publish',
    'allow_back_navigation': False,
    'shuffle_questions': True,
    'prevent_duplicate_attempts': True,
}


def take_exam(exam, email, choices):
    session = sessions.start_session(exam.exam_code, email.split('@')[0].title(), email)
    for question in exam.questions.all():
        choice = choices.get(question.correct_option)
        if choice:
            scoring.record_answer(session.session_token, question.id, choice)
    return sessions.finalize(session.session_token)


def test_admin_endpoints_require_staff(api_client, exam, django_user_model):
    assert api_client.get(reverse('exams-list')).status_code in (401, 403)

    candidate = django_user_model.objects.create_user(username='someone', password='x-Passw0rd!')
    api_client.force_authenticate(user=candidate)
    assert api_client.get(reverse('exams-list')).status_code == 403


def test_create_exam_normalizes_code_and_logs(admin_client):
    response = admin_client.post(reverse('exams-list'), EXAM_PAYLOAD, format='json')

    assert response.status_code == 201
    exam = Exam.objects.get()
    assert exam.exam_code == 'PHY-01'
    assert exam.result_mode == Exam.ResultMode.AFTER_PUBLISH
    assert exam.results_published is False
    assert AuditLog.objects.filter(action='CREATE', target_model='Exam', target_object_id=str(exam.id)).exists()


def test_duplicate_exam_code_rejected_case_insensitively(admin_client, make_exam):
    make_exam(exam_code='PHY-01')

    response = admin_client.post(reverse('exams-list'), EXAM_PAYLOAD, format='json')

    assert response.status_code == 400
    assert 'Exam code already exists' in response.data['error']


def test_negative_marking_cannot_be_negative(admin_client):
    payload = dict(EXAM_PAYLOAD, negative_marking='-1')
    response = admin_client.post(reverse('exams-list'), payload, format='json')
    assert response.status_code == 400


def test_exam_list_includes_counts(admin_client, exam):
    take_exam(exam, 'ada@example.com', {'A': 'A'})
    sessions.start_session(exam.exam_code, 'Busy', 'busy@example.com')

    response = admin_client.get(reverse('exams-list'))

    row = response.data[0]
    assert row['question_count'] == 3
    assert row['submission_count'] == 1


def test_toggle_and_publish(admin_client, exam):
    toggled = admin_client.post(reverse('exams-toggle-active', args=[exam.id]))
    assert toggled.data == {'success': True, 'is_active': False}

    published = admin_client.post(reverse('exams-publish-results', args=[exam.id]))
    assert published.data['results_published'] is True
    exam.refresh_from_db()
    assert exam.results_published is True

    admin_client.post(reverse('exams-unpublish-results', args=[exam.id]))
    exam.refresh_from_db()
    assert exam.results_published is False
    assert AuditLog.objects.filter(action='PUBLISH').count() == 1
    assert AuditLog.objects.filter(action='UNPUBLISH').count() == 1


def test_delete_exam_cascades(admin_client, exam):
    take_exam(exam, 'ada@example.com', {'A': 'A', 'B': 'C'})

    response = admin_client.delete(reverse('exams-detail', args=[exam.id]))

    assert response.status_code == 204
    assert not Question.objects.exists()
    assert not CandidateSession.objects.exists()
    assert not AnswerResponse.objects.exists()


def test_question_creation_appends_and_normalizes(admin_client, exam):
    payload = {
        'exam': exam.id,
        'question_text': 'Speed of light?',
        'option_a': '3e8 m/s', 'option_b': '1 m/s', 'option_c': '340 m/s', 'option_d': '0',
        'correct_option': 'a',
        'marks': 4,
    }

    response = admin_client.post(reverse('questions-list'), payload, format='json')

    assert response.status_code == 201
    assert response.data['correct_option'] == 'A'
    assert response.data['question_order'] == 4


def test_question_rejects_bad_correct_option(admin_client, exam):
    payload = {
        'exam': exam.id, 'question_text': 'Q', 'option_a': 'a', 'option_b': 'b',
        'option_c': 'c', 'option_d': 'd', 'correct_option': 'E',
    }
    response = admin_client.post(reverse('questions-list'), payload, format='json')
    assert response.status_code == 400


def test_question_list_filtered_by_exam(admin_client, exam, make_exam, make_question):
    make_question(make_exam(exam_code='OTHER'))

    response = admin_client.get(reverse('questions-list'), {'exam_id': exam.id})

    assert [q['exam'] for q in response.data] == [exam.id] * 3


def test_deleting_question_removes_its_responses(admin_client, exam):
    take_exam(exam, 'ada@example.com', {'A': 'A', 'B': 'B'})
    question = exam.questions.get(correct_option='A')

    admin_client.delete(reverse('questions-detail', args=[question.id]))

    assert not AnswerResponse.objects.filter(question_id=question.id).exists()
    assert AnswerResponse.objects.count() == 1


def test_candidates_ordered_by_score(admin_client, exam):
    take_exam(exam, 'low@example.com', {'A': 'A'})
    take_exam(exam, 'high@example.com', {'B': 'B', 'C': 'C'})

    response = admin_client.get(reverse('exams-candidates', args=[exam.id]))

    assert [c['email'] for c in response.data] == ['high@example.com', 'low@example.com']
    assert response.data[0]['questions_answered'] == 2
    assert response.data[0]['percentage'] == pytest.approx(83.33)
    assert response.data[0]['status'] == 'completed'


def test_candidate_detail_and_delete(admin_client, exam):
    session = take_exam(exam, 'ada@example.com', {'A': 'A', 'C': 'B'})

    detail = admin_client.get(reverse('candidates-detail', args=[session.id]))
    assert detail.status_code == 200
    assert detail.data['exam_code'] == 'GK101'
    assert [r['correct_option'] for r in detail.data['responses']] == ['A', 'C']
    assert [r['is_correct'] for r in detail.data['responses']] == [True, False]

    deleted = admin_client.delete(reverse('candidates-detail', args=[session.id]))
    assert deleted.data == {'success': True}
    assert not CandidateSession.objects.exists()
    assert not AnswerResponse.objects.exists()


def test_export_csv(admin_client, exam):
    take_exam(exam, 'ada@example.com', {'A': 'A', 'B': 'B'})
    sessions.start_session(exam.exam_code, 'Busy', 'busy@example.com')

    response = admin_client.get(reverse('exams-export', args=[exam.id]))

    assert response.status_code == 200
    assert response['Content-Type'] == 'text/csv'
    assert response['Content-Disposition'] == 'attachment; filename="GK101-results.csv"'
    rows = list(csv.reader(io.StringIO(response.content.decode())))
    assert rows[0] == ['Rank', 'Name', 'Email', 'Score', 'Total Marks', 'Percentage', 'Start Time', 'End Time']
    assert len(rows) == 2
    assert rows[1][:6] == ['1', 'Ada', 'ada@example.com', '3.00', '6', '50.00%']


def test_dashboard_stats(admin_client, exam, make_exam):
    make_exam(exam_code='IDLE', is_active=False)
    take_exam(exam, 'ada@example.com', {'A': 'A'})

    response = admin_client.get(reverse('admin-stats'))

    assert response.data['total_exams'] == 2
    assert response.data['active_exams'] == 1
    assert response.data['total_questions'] == 3
    assert response.data['total_submissions'] == 1
    submissions = {row['exam_code']: row['submissions'] for row in response.data['recent_exams']}
    assert submissions == {'GK101': 1, 'IDLE': 0}


def test_site_settings_public_read_admin_write(api_client, admin_client):
    public = api_client.get(reverse('site-settings'))
    assert public.status_code == 200
    assert public.data['portal_title'] == 'Exam Portal'

    assert api_client.put(reverse('site-settings'), {'portal_title': 'Hacked'}, format='json').status_code in (401, 403)

    updated = admin_client.put(reverse('site-settings'), {'portal_title': 'Entrance Test', 'footer_text': 'Good luck'}, format='json')
    assert updated.status_code == 200
    assert SiteSetting.load().portal_title == 'Entrance Test'
    assert api_client.get(reverse('site-settings')).data['footer_text'] == 'Good luck'
    assert AuditLog.objects.filter(action='SETTINGS').exists()


def test_audit_log_filter(admin_client, exam):
    admin_client.post(reverse('exams-toggle-active', args=[exam.id]))
    admin_client.post(reverse('exams-publish-results', args=[exam.id]))

    response = admin_client.get(reverse('audit-logs'), {'action': 'PUBLISH'})

    assert [row['action'] for row in response.data] == ['PUBLISH']
    assert response.data[0]['actor_username'] == 'operator'


def test_candidates_in_progress_listed_after_scored(admin_client, exam):
    sessions.start_session(exam.exam_code, 'Busy', 'busy@example.com')
    take_exam(exam, 'ada@example.com', {'A': 'A'})

    response = admin_client.get(reverse('exams-candidates', args=[exam.id]))

    assert [c['email'] for c in response.data] == ['ada@example.com', 'busy@example.com']
    assert response.data[1]['score'] is None


def test_audit_log_filter_by_target(admin_client, exam):
    question = exam.questions.first()
    admin_client.post(reverse('exams-toggle-active', args=[exam.id]))
    admin_client.delete(reverse('questions-detail', args=[question.id]))

    by_model = admin_client.get(reverse('audit-logs'), {'target_model': 'question'})
    assert [(row['action'], row['target_model']) for row in by_model.data] == [('DELETE', 'Question')]

    by_id = admin_client.get(reverse('audit-logs'), {'target_model': 'Exam', 'target_id': exam.id})
    assert by_id.data and all(row['target_object_id'] == str(exam.id) for row in by_id.data)
