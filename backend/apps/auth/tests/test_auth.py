from datetime import timedelta

from rest_framework import status
from rest_framework.test import APITestCase

from apps.auth.credentials import CredentialHelper
from apps.users.models import User


class TestAuth(APITestCase):
    def setUp(self):
        self.register_url = '/api/auth/register'
        self.login_url = '/api/auth/login'
        self.profile_url = '/api/auth/profile'
        self.user_data = {
            'name': 'John Doe',
            'email': 'john@example.com',
            'password': 'secret123',
            'age': 30,
        }

    def _login_token(self):
        self.client.post(self.register_url, self.user_data, format='json')
        login = self.client.post(
            self.login_url,
            {'email': 'john@example.com', 'password': 'secret123'},
            format='json',
        )
        return login.data['data']['token']

    def test_register(self):
        response = self.client.post(self.register_url, self.user_data, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['message'], 'User registered successfully')
        self.assertIn('token', response.data['data'])
        self.assertNotIn('password', response.data['data']['user'])
        stored = User.objects.get(email='john@example.com')
        self.assertNotEqual(stored.password, 'secret123')

    def test_register_duplicate_email(self):
        self.client.post(self.register_url, self.user_data, format='json')
        response = self.client.post(self.register_url, self.user_data, format='json')
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data['message'], 'User with this email already exists')
        self.assertEqual(User.objects.count(), 1)

    def test_register_missing_password(self):
        response = self.client.post(
            self.register_url, {'name': 'A', 'email': 'a@example.com'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['message'], 'Name, email and password are required')

    def test_login(self):
        self.client.post(self.register_url, self.user_data, format='json')
        response = self.client.post(
            self.login_url, {'email': 'john@example.com', 'password': 'secret123'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['message'], 'Login successful')
        self.assertEqual(response.data['data']['user']['email'], 'john@example.com')

    def test_login_wrong_password_and_unknown_email(self):
        self.client.post(self.register_url, self.user_data, format='json')
        wrong = self.client.post(
            self.login_url, {'email': 'john@example.com', 'password': 'nope'}, format='json'
        )
        unknown = self.client.post(
            self.login_url, {'email': 'ghost@example.com', 'password': 'nope'}, format='json'
        )
        self.assertEqual(wrong.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(wrong.data, {'success': False, 'message': 'Invalid credentials'})
        self.assertEqual(unknown.data, wrong.data)

    def test_user_created_without_password_cannot_login(self):
        self.client.post('/api/users', {'name': 'A', 'email': 'a@example.com'}, format='json')
        response = self.client.post(
            self.login_url, {'email': 'a@example.com', 'password': 'x'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_profile_authenticated(self):
        token = self._login_token()
        self.client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')
        response = self.client.get(self.profile_url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['email'], 'john@example.com')
        self.assertEqual(response.data['data']['age'], 30)

    def test_profile_unauthenticated(self):
        response = self.client.get(self.profile_url)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data, {'success': False, 'message': 'Access token required'})

    def test_profile_non_bearer_header(self):
        self.client.credentials(HTTP_AUTHORIZATION='Basic am9objpzZWNyZXQ=')
        response = self.client.get(self.profile_url)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_profile_tampered_token(self):
        token = self._login_token()
        header, payload, _ = token.split('.')
        forged = CredentialHelper().issue_token(999, 'forged@example.com').split('.')[2]
        self.client.credentials(HTTP_AUTHORIZATION=f'Bearer {header}.{payload}.{forged}')
        response = self.client.get(self.profile_url)
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data['message'], 'Invalid or expired token')

    def test_profile_expired_token(self):
        user = User.objects.create(name='A', email='a@example.com')
        expired = CredentialHelper().issue_token(
            user.id, user.email, lifetime=timedelta(seconds=-5)
        )
        self.client.credentials(HTTP_AUTHORIZATION=f'Bearer {expired}')
        response = self.client.get(self.profile_url)
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_profile_for_deleted_user(self):
        token = self._login_token()
        User.objects.filter(email='john@example.com').delete()
        self.client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')
        response = self.client.get(self.profile_url)
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['message'], 'User not found')
