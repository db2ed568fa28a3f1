import types
import unittest
from unittest.mock import Mock

from rest_framework import status

from apps.api.exceptions import AuthError, ConflictError, NotFoundError, ValidationError
from apps.auth.views import LoginView, ProfileView, RegisterView
from apps.users.dtos import UserDTO


class DummyRequest:
    def __init__(self, data=None, user=None, method="POST"):
        self.data = data if data is not None else {}
        self.user = user
        self.method = method


USER = UserDTO(1, "John Doe", "john@example.com", 30, None, None)


class RegisterViewUnitTests(unittest.TestCase):
    def setUp(self):
        self.service = Mock()
        self.view = RegisterView()
        self.view.service = self.service

    def test_register_success(self):
        self.service.register.return_value = ({"user": USER, "token": "tok"}, None)
        response = self.view.post(
            DummyRequest(
                {"name": "John Doe", "email": "john@example.com", "password": "secret123", "age": 30}
            )
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["message"], "User registered successfully")
        self.assertEqual(response.data["data"]["token"], "tok")
        self.assertEqual(
            response.data["data"]["user"],
            {"id": 1, "name": "John Doe", "email": "john@example.com", "age": 30},
        )
        self.service.register.assert_called_once_with(
            "John Doe", "john@example.com", "secret123", age=30
        )

    def test_register_requires_fields(self):
        with self.assertRaises(ValidationError) as ctx:
            self.view.post(DummyRequest({"name": "x", "email": "x@example.com"}))
        self.assertEqual(ctx.exception.message, "Name, email and password are required")
        self.service.register.assert_not_called()

    def test_register_conflict(self):
        self.service.register.return_value = (
            None,
            ("CONFLICT", "User with this email already exists", None),
        )
        with self.assertRaises(ConflictError):
            self.view.post(
                DummyRequest({"name": "x", "email": "x@example.com", "password": "pw"})
            )


class LoginViewUnitTests(unittest.TestCase):
    def setUp(self):
        self.service = Mock()
        self.view = LoginView()
        self.view.service = self.service

    def test_login_success(self):
        self.service.login.return_value = ({"user": USER, "token": "tok"}, None)
        response = self.view.post(
            DummyRequest({"email": "john@example.com", "password": "secret123"})
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["message"], "Login successful")
        self.assertEqual(response.data["data"]["user"]["id"], 1)

    def test_login_requires_fields(self):
        with self.assertRaises(ValidationError) as ctx:
            self.view.post(DummyRequest({"email": "john@example.com"}))
        self.assertEqual(ctx.exception.message, "Email and password are required")

    def test_login_invalid_credentials(self):
        self.service.login.return_value = (
            None,
            ("UNAUTHORIZED", "Invalid credentials", None),
        )
        with self.assertRaises(AuthError) as ctx:
            self.view.post(DummyRequest({"email": "john@example.com", "password": "bad"}))
        self.assertEqual(ctx.exception.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(ctx.exception.message, "Invalid credentials")


class ProfileViewUnitTests(unittest.TestCase):
    def setUp(self):
        self.service = Mock()
        self.view = ProfileView()
        self.view.service = self.service

    def test_profile_for_token_identity(self):
        self.service.get_profile.return_value = USER
        request = DummyRequest(user=types.SimpleNamespace(id=1), method="GET")
        response = self.view.get(request)
        self.assertEqual(response.data["data"]["email"], "john@example.com")
        self.assertNotIn("createdAt", response.data["data"])
        self.service.get_profile.assert_called_once_with(1)

    def test_profile_user_deleted_after_token_issued(self):
        self.service.get_profile.return_value = None
        request = DummyRequest(user=types.SimpleNamespace(id=5), method="GET")
        with self.assertRaises(NotFoundError) as ctx:
            self.view.get(request)
        self.assertEqual(ctx.exception.message, "User not found")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
