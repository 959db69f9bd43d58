"""Tests for auth service"""

from django.contrib.auth.models import User
from django.test import TestCase, override_settings

from ..domain import ErrorCode
from ..services.auth_service import AuthService


@override_settings(CARPOOL_ALLOWED_EMAIL_DOMAINS=['mahindrauniversity.edu.in'])
class AuthServiceTest(TestCase):
    def setUp(self):
        self.service = AuthService()

    def register(self, email='asha@mahindrauniversity.edu.in', **kwargs):
        return self.service.register(email, 'correct-horse-battery', 'Asha', 'Rao', **kwargs)

    def test_is_allowed_email(self):
        self.assertTrue(self.service.is_allowed_email('asha@mahindrauniversity.edu.in'))
        self.assertTrue(self.service.is_allowed_email('ASHA@MahindraUniversity.edu.in'))
        self.assertFalse(self.service.is_allowed_email('asha@gmail.com'))
        self.assertFalse(self.service.is_allowed_email('asha@fakemahindrauniversity.edu.in'))
        self.assertFalse(self.service.is_allowed_email('not-an-email'))
        self.assertFalse(self.service.is_allowed_email(''))

    def test_register_creates_verified_profile(self):
        result = self.register(phone_number='9999999999', student_id='MU-001')

        self.assertTrue(result.success)
        user = User.objects.get(email='asha@mahindrauniversity.edu.in')
        self.assertTrue(user.check_password('correct-horse-battery'))
        self.assertTrue(user.profile.is_verified)
        self.assertEqual(user.profile.student_id, 'MU-001')
        self.assertEqual(user.profile.display_name, 'Asha Rao')

    def test_domain_not_allowed(self):
        result = self.register(email='asha@gmail.com')

        self.assertEqual(result.error_code, ErrorCode.DOMAIN_NOT_ALLOWED)
        self.assertFalse(User.objects.exists())

    def test_duplicate_account(self):
        self.register()
        result = self.register(email='ASHA@mahindrauniversity.edu.in')
        self.assertEqual(result.error_code, ErrorCode.DUPLICATE_ACCOUNT)

    def test_duplicate_student_id(self):
        self.register(student_id='MU-001')
        result = self.register(email='ravi@mahindrauniversity.edu.in', student_id='MU-001')
        self.assertEqual(result.error_code, ErrorCode.DUPLICATE_ACCOUNT)

    @override_settings(CARPOOL_ALLOWED_EMAIL_DOMAINS=['mahindrauniversity.edu.in', 'example.edu'])
    def test_additional_domains(self):
        self.assertTrue(self.register(email='guest@example.edu').success)
