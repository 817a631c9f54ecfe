from datetime import timedelta

import jwt
import pytest
from fastapi.testclient import TestClient

from courseapp import services
from courseapp.config import settings
from courseapp.main import app
from courseapp.models import User
from courseapp.repositories import UserRepository

client = TestClient(app)


def test_register_login_and_fetch_current_user():
    r = client.post('/auth/register', json={'email': 'Student@UCSB.edu', 'password': 'pass123', 'fullName': 'Stu Dent'})
    assert r.status_code == 200
    assert r.json()['email'] == 'student@ucsb.edu'
    assert 'passwordHash' not in r.json()
    # registering again returns the same user
    again = client.post('/auth/register', json={'email': 'student@ucsb.edu', 'password': 'other'})
    assert again.json()['id'] == r.json()['id']

    r2 = client.post('/auth/login', json={'email': 'student@ucsb.edu', 'password': 'pass123'})
    assert r2.status_code == 200
    token = r2.json()['accessToken']

    me = client.get('/api/currentUser', headers={'Authorization': f'Bearer {token}'})
    assert me.status_code == 200
    assert me.json()['user']['fullName'] == 'Stu Dent'
    assert me.json()['roles'] == ['ROLE_USER']


def test_login_with_wrong_password_is_401(regular_user):
    r = client.post('/auth/login', json={'email': 'student@ucsb.edu', 'password': 'nope'})
    assert r.status_code == 401


def test_login_for_unknown_email_is_401():
    r = client.post('/auth/login', json={'email': 'ghost@ucsb.edu', 'password': 'pass123'})
    assert r.status_code == 401


def test_admin_flag_grants_admin_role(admin_headers):
    me = client.get('/api/currentUser', headers=admin_headers)
    assert me.json()['roles'] == ['ROLE_USER', 'ROLE_ADMIN']


def test_admin_emails_setting_grants_admin_role(session):
    assert 'listed-admin@ucsb.edu' in settings.ADMIN_EMAILS
    user = services.AuthService(session).register('listed-admin@ucsb.edu', 'pass123')
    assert user.admin is False
    assert services.roles_for(user) == [services.Role.USER, services.Role.ADMIN]
    r = client.get('/api/admin/users', headers={'Authorization': f'Bearer {services.issue_token(user)}'})
    assert r.status_code == 200


def test_roles_follow_the_database_not_the_token(session, regular_user, user_headers):
    assert client.get('/api/admin/users', headers=user_headers).status_code == 403
    services.AuthService(session).set_admin('student@ucsb.edu')
    assert client.get('/api/admin/users', headers=user_headers).status_code == 200


def test_admin_can_list_users(admin_user, regular_user, admin_headers):
    r = client.get('/api/admin/users', headers=admin_headers)
    assert r.status_code == 200
    emails = [u['email'] for u in r.json()]
    assert sorted(emails) == ['admin@ucsb.edu', 'student@ucsb.edu']
    assert all('passwordHash' not in u for u in r.json())


def test_missing_token_is_forbidden():
    assert client.get('/api/currentUser').status_code == 403


def test_expired_token_is_forbidden(regular_user):
    token = services.issue_token(regular_user, expires_in=timedelta(seconds=-30))
    r = client.get('/api/currentUser', headers={'Authorization': f'Bearer {token}'})
    assert r.status_code == 403
    assert r.json()['detail'] == 'token expired'


def test_token_signed_with_another_secret_is_forbidden(regular_user):
    token = jwt.encode({'user_id': regular_user.id}, 'not-the-secret', algorithm='HS256')
    r = client.get('/api/currentUser', headers={'Authorization': f'Bearer {token}'})
    assert r.status_code == 403
    assert r.json()['detail'] == 'invalid token'


def test_token_for_deleted_user_is_forbidden(session):
    user = services.AuthService(session).register('gone@ucsb.edu', 'pass123')
    headers = {'Authorization': f'Bearer {services.issue_token(user)}'}
    UserRepository(session).delete(user)
    r = client.get('/api/currentUser', headers=headers)
    assert r.status_code == 403


def test_set_admin_for_unknown_email_raises(session):
    with pytest.raises(LookupError):
        services.AuthService(session).set_admin('ghost@ucsb.edu')


def test_request_id_header_exists():
    r = client.get('/health')
    assert r.status_code == 200
    assert r.json() == {'status': 'ok'}
    assert 'X-Request-ID' in r.headers


def test_request_id_is_propagated():
    r = client.get('/health', headers={'X-Request-ID': 'abc123'})
    assert r.headers['X-Request-ID'] == 'abc123'


def test_user_rows_store_hashes_not_passwords(session, regular_user):
    stored = session.get(User, regular_user.id)
    assert stored.password_hash != 'pass123'
    assert services.PWD_CTX.verify('pass123', stored.password_hash)
