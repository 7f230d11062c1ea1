from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.users.models import User


class TestAuth(APITestCase):
    def setUp(self):
        self.login_url = reverse('auth-login')
        self.me_url = reverse('auth-me')
        self.refresh_url = reverse('auth-refresh')
        self.user = User.objects.create_user(
            username='teacher',
            email='teacher@example.com',
            password='TestPass123',
            first_name='Sara',
        )

    def login(self):
        return self.client.post(
            self.login_url,
            {'username': 'teacher', 'password': 'TestPass123'},
            format='json',
        )

    def test_login_returns_token_pair_in_envelope(self):
        response = self.login()
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['success'])
        self.assertIn('access', response.data['data'])
        self.assertIn('refresh', response.data['data'])

    def test_login_with_wrong_password_is_unauthorized(self):
        response = self.client.post(
            self.login_url,
            {'username': 'teacher', 'password': 'nope'},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(response.data['success'])
        self.assertEqual(response.data['error']['code'], 'UNAUTHORIZED')

    def test_me_authenticated(self):
        token = self.login().data['data']['access']
        self.client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')
        response = self.client.get(self.me_url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['username'], 'teacher')
        self.assertFalse(response.data['data']['is_staff'])

    def test_me_unauthenticated(self):
        response = self.client.get(self.me_url)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data['message'], 'يجب تسجيل الدخول أولاً')

    def test_refresh_token(self):
        refresh = self.login().data['data']['refresh']
        response = self.client.post(self.refresh_url, {'refresh': refresh}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('access', response.data['data'])
