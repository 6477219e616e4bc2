from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from authentication.models import LoginEvent, UserRole
from marketplace.tests.factories import AdminFactory, SellerFactory, UserFactory


User = get_user_model()


class RegisterViewTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.url = reverse("authentication:register")

    def test_register_returns_tokens_and_user(self):
        response = self.client.post(
            self.url,
            {"email": "Meera@Example.com ", "password": "bright-mango-42", "full_name": " Meera Nair "},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertIn("access", response.data)
        self.assertIn("refresh", response.data)
        self.assertEqual(response.data["user"]["email"], "meera@example.com")
        self.assertEqual(response.data["user"]["full_name"], "Meera Nair")
        self.assertEqual(response.data["user"]["role"], "user")

        user = User.objects.get(email="meera@example.com")
        self.assertTrue(UserRole.objects.filter(user=user, role="user").exists())

    def test_duplicate_email_is_case_insensitive(self):
        UserFactory(email="meera@example.com")

        response = self.client.post(
            self.url, {"email": "MEERA@example.com", "password": "bright-mango-42"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "email_taken")
        self.assertIn("email", response.data["errors"])

    def test_weak_password_is_rejected(self):
        response = self.client.post(self.url, {"email": "a@example.com", "password": "123456"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "invalid_password")
        self.assertFalse(User.objects.filter(email="a@example.com").exists())

    def test_usernames_stay_unique(self):
        UserFactory(username="ravi", email="ravi@other.com")

        response = self.client.post(
            self.url, {"email": "ravi@example.com", "password": "bright-mango-42"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["user"]["username"], "ravi2")


class LoginViewTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.url = reverse("authentication:login")
        self.user = UserFactory(email="kiran@example.com", password="bright-mango-42")

    def login(self, email="kiran@example.com", password="bright-mango-42"):
        return self.client.post(self.url, {"email": email, "password": password}, format="json")

    def test_login_success_records_history(self):
        response = self.client.post(
            self.url,
            {"email": "KIRAN@example.com", "password": "bright-mango-42"},
            format="json",
            HTTP_USER_AGENT="pytest-agent",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["message"], "Login successful")
        event = LoginEvent.objects.get(user=self.user)
        self.assertTrue(event.success)
        self.assertEqual(event.user_agent, "pytest-agent")

    def test_token_carries_role_claims(self):
        SellerFactory(user=self.user)

        response = self.login()

        token = AccessToken(response.data["access"])
        self.assertEqual(token["role"], "shopkeeper")
        self.assertTrue(token["is_shopkeeper"])
        self.assertFalse(token["is_admin"])

    def test_wrong_password(self):
        response = self.login(password="nope-nope")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data["error"], "invalid_credentials")
        event = LoginEvent.objects.get()
        self.assertFalse(event.success)
        self.assertEqual(event.failure_reason, "wrong_password")

    def test_unknown_email_uses_same_error(self):
        response = self.login(email="ghost@example.com", password="whatever")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data["error"], "invalid_credentials")
        self.assertEqual(LoginEvent.objects.get().failure_reason, "user_not_found")

    def test_inactive_account(self):
        self.user.is_active = False
        self.user.save()

        response = self.login()

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["error"], "account_inactive")

    def test_refresh_token(self):
        login = self.login()

        response = self.client.post(
            reverse("authentication:token_refresh"), {"refresh": login.data["refresh"]}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn("access", response.data)


class MeAndProfileTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = UserFactory(email="dev@example.com")
        self.client.force_authenticate(user=self.user)

    def test_me_for_buyer(self):
        response = self.client.get(reverse("authentication:me"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["role"], "user")
        self.assertIsNone(response.data["seller_status"])
        self.assertIn("profile", response.data)

    def test_me_for_admin(self):
        admin = AdminFactory()
        self.client.force_authenticate(user=admin)

        response = self.client.get(reverse("authentication:me"))

        self.assertEqual(response.data["role"], "admin")
        self.assertTrue(response.data["is_admin"])

    def test_me_requires_authentication(self):
        self.client.force_authenticate(user=None)

        response = self.client.get(reverse("authentication:me"))

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_update_profile(self):
        response = self.client.patch(
            reverse("authentication:profile"), {"full_name": "  Dev Sharma ", "bio": "Collector"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["full_name"], "Dev Sharma")
        self.user.profile.refresh_from_db()
        self.assertEqual(self.user.profile.bio, "Collector")
        self.assertEqual(self.user.display_name, "Dev Sharma")

    def test_invalid_avatar_url(self):
        response = self.client.patch(reverse("authentication:profile"), {"avatar_url": "not a url"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_login_history_is_own_only(self):
        LoginEvent.objects.create(user=self.user, email=self.user.email, success=True)
        LoginEvent.objects.create(user=UserFactory(), email="other@example.com", success=True)

        response = self.client.get(reverse("authentication:login_history"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]["email"], "dev@example.com")
