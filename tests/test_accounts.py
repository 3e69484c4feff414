"""Tests for passwordless sign-in."""

from urllib.parse import parse_qs, urlparse

import pytest
from django.contrib.auth import get_user_model
from django.core import mail, signing
from django.test import override_settings

from accounts.auth import InvalidSignInCode, make_sign_in_code, user_for_code


def code_from_mail(message):
    link = next(line for line in message.body.splitlines() if '/auth/callback?' in line)
    return parse_qs(urlparse(link.strip()).query)


@pytest.mark.django_db
class TestSignInRequest:

    def test_new_email_registers_and_mails_link(self, api_client):
        response = api_client.post('/api/auth/sign-in', {'email': 'new@example.com'}, format='json')
        assert response.status_code == 202
        assert get_user_model().objects.filter(email='new@example.com').exists()
        assert len(mail.outbox) == 1
        assert mail.outbox[0].to == ['new@example.com']
        assert 'code' in code_from_mail(mail.outbox[0])

    def test_existing_user_gets_same_answer(self, api_client, visitor):
        response = api_client.post('/api/auth/sign-in', {'email': visitor.email.upper()}, format='json')
        assert response.status_code == 202
        assert get_user_model().objects.filter(email__iexact=visitor.email).count() == 1

    def test_redirect_is_carried_in_link(self, api_client, visitor):
        api_client.post(
            '/api/auth/sign-in', {'email': visitor.email, 'redirect': '/invite/abc'}, format='json',
        )
        assert code_from_mail(mail.outbox[0])['redirect'] == ['/invite/abc']

    def test_invalid_email(self, api_client):
        response = api_client.post('/api/auth/sign-in', {'email': 'not-an-email'}, format='json')
        assert response.status_code == 400


@pytest.mark.django_db
class TestSignInCode:

    def test_round_trip(self, visitor):
        assert user_for_code(make_sign_in_code(visitor)) == visitor

    def test_tampered_code(self, visitor):
        code = make_sign_in_code(visitor)
        with pytest.raises(InvalidSignInCode):
            user_for_code(code[:-1] + ('A' if code[-1] != 'A' else 'B'))

    @override_settings(SIGN_IN_CODE_MAX_AGE=-1)
    def test_expired_code(self, visitor):
        with pytest.raises(InvalidSignInCode):
            user_for_code(make_sign_in_code(visitor))

    def test_code_for_other_purpose_is_rejected(self, visitor):
        code = signing.TimestampSigner(salt='something-else').sign_object({'uid': visitor.pk, 'll': ''})
        with pytest.raises(InvalidSignInCode):
            user_for_code(code)


@pytest.mark.django_db
class TestCallback:

    def test_code_creates_session_and_redirects(self, client, visitor):
        code = make_sign_in_code(visitor)
        response = client.get('/auth/callback', {'code': code, 'redirect': '/memorials/abc'})
        assert response.status_code == 302
        assert response['Location'] == '/memorials/abc'
        assert client.session['_auth_user_id'] == str(visitor.pk)

    def test_code_works_once(self, client, visitor):
        code = make_sign_in_code(visitor)
        client.get('/auth/callback', {'code': code})
        client.logout()
        response = client.get('/auth/callback', {'code': code})
        assert response['Location'] == '/sign-in'

    def test_default_redirect(self, client, visitor):
        response = client.get('/auth/callback', {'code': make_sign_in_code(visitor)})
        assert response['Location'] == '/dashboard'

    def test_offsite_redirect_is_ignored(self, client, visitor):
        response = client.get(
            '/auth/callback', {'code': make_sign_in_code(visitor), 'redirect': 'https://evil.example.com/'},
        )
        assert response['Location'] == '/dashboard'

    def test_invalid_code_goes_to_sign_in(self, client):
        response = client.get('/auth/callback', {'code': 'garbage'})
        assert response.status_code == 302
        assert response['Location'] == '/sign-in'


@pytest.mark.django_db
class TestSession:

    def test_me(self, client_for, visitor):
        response = client_for(visitor).get('/api/auth/me')
        assert response.status_code == 200
        assert response.data['email'] == visitor.email

    def test_me_requires_sign_in(self, api_client):
        assert api_client.get('/api/auth/me').status_code == 401

    def test_sign_out(self, client, visitor):
        client.force_login(visitor)
        response = client.post('/api/auth/sign-out')
        assert response.status_code == 204
        assert '_auth_user_id' not in client.session
