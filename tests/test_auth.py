import pytest
from django.core.cache import cache
from django.urls import reverse

from cores.models import AuditLog
from cores.ratelimit import LoginRateLimiter

from .conftest import OPERATOR_PASSWORD

pytestmark = pytest.mark.django_db


class FakeClock:
    def __init__(self, now=1_000_000.0):
        self.now = now

    def __call__(self):
        return self.now


def login(client, password, username='operator'):
    return client.post(reverse('login'), {'username': username, 'password': password}, format='json')


def test_login_returns_tokens_and_operator(api_client, operator):
    response = login(api_client, OPERATOR_PASSWORD)

    assert response.status_code == 200
    assert 'access' in response.data and 'refresh' in response.data
    assert response.data['user']['username'] == 'operator'
    assert response.data['user']['is_staff'] is True
    assert AuditLog.objects.filter(action='LOGIN', actor=operator).exists()


def test_login_with_email(api_client, operator):
    response = login(api_client, OPERATOR_PASSWORD, username='Operator@Example.com')
    assert response.status_code == 200


def test_bad_password_is_unauthorized(api_client, operator):
    response = login(api_client, 'wrong')
    assert response.status_code == 401
    assert response.data['success'] is False


def test_lockout_after_repeated_failures(api_client, operator, settings):
    settings.LOGIN_MAX_ATTEMPTS = 5
    for _ in range(5):
        assert login(api_client, 'wrong').status_code == 401

    locked = login(api_client, OPERATOR_PASSWORD)

    assert locked.status_code == 429
    assert locked.data['error'] == 'Too many login attempts. Please try again in 15 minutes.'


def test_successful_login_clears_failures(api_client, operator):
    for _ in range(3):
        login(api_client, 'wrong')

    assert login(api_client, OPERATOR_PASSWORD).status_code == 200
    assert LoginRateLimiter().attempts('127.0.0.1') == []


def test_limiter_window_expires():
    clock = FakeClock()
    limiter = LoginRateLimiter(max_attempts=2, lockout_seconds=60, cache=cache, clock=clock)

    limiter.record_failure('10.0.0.1')
    clock.now += 10
    limiter.record_failure('10.0.0.1')
    assert limiter.retry_after('10.0.0.1') == 50
    assert limiter.retry_after('10.0.0.2') == 0

    clock.now += 51
    assert limiter.retry_after('10.0.0.1') == 0
    assert len(limiter.attempts('10.0.0.1')) == 1


def test_change_password(admin_client, operator):
    wrong = admin_client.post(
        reverse('change-password'),
        {'current_password': 'nope', 'new_password': 'An0ther-long-pass'},
        format='json',
    )
    assert wrong.status_code == 400
    assert 'Current password is incorrect' in wrong.data['error']

    ok = admin_client.post(
        reverse('change-password'),
        {'current_password': OPERATOR_PASSWORD, 'new_password': 'An0ther-long-pass'},
        format='json',
    )
    assert ok.status_code == 200
    operator.refresh_from_db()
    assert operator.check_password('An0ther-long-pass')
