"""Authentication service - student registration restricted to university e-mail"""

import logging

from django.conf import settings
from django.contrib.auth.models import User
from django.core.exceptions import ValidationError
from django.core.validators import validate_email
from django.db import IntegrityError, transaction

from ..domain import ErrorCode, ServiceResult
from ..models import Profile

logger = logging.getLogger(__name__)


class AuthService:
    """Service for authentication operations"""

    def allowed_domains(self):
        return [d.strip().lower() for d in settings.CARPOOL_ALLOWED_EMAIL_DOMAINS if d.strip()]

    def is_allowed_email(self, email):
        """True when the address is well formed and belongs to an allowed domain"""
        email = (email or '').strip().lower()
        try:
            validate_email(email)
        except ValidationError:
            return False
        return any(email.endswith(f'@{domain}') for domain in self.allowed_domains())

    def register(self, email, password, first_name, last_name, phone_number='', student_id=''):
        """
        Create a User and its Profile.

        Returns:
            ServiceResult with the User, or DOMAIN_NOT_ALLOWED, DUPLICATE_ACCOUNT
        """
        email = (email or '').strip().lower()
        if not self.is_allowed_email(email):
            logger.warning(f'[AUTH] Registration rejected for domain of {email!r}')
            return ServiceResult.fail(ErrorCode.DOMAIN_NOT_ALLOWED)
        if User.objects.filter(email__iexact=email).exists() or User.objects.filter(username=email).exists():
            return ServiceResult.fail(ErrorCode.DUPLICATE_ACCOUNT)
        if student_id and Profile.objects.filter(student_id=student_id).exists():
            return ServiceResult.fail(ErrorCode.DUPLICATE_ACCOUNT, 'Student ID is already registered')

        try:
            with transaction.atomic():
                user = User.objects.create_user(
                    username=email,
                    email=email,
                    password=password,
                    first_name=first_name,
                    last_name=last_name,
                )
                # Profile is created by the post_save signal
                profile, _ = Profile.objects.get_or_create(user=user)
                profile.phone_number = phone_number or ''
                profile.student_id = student_id or None
                profile.is_verified = True
                profile.save()
        except IntegrityError:
            return ServiceResult.fail(ErrorCode.DUPLICATE_ACCOUNT)

        logger.info(f'[AUTH] Registered user {user.id} ({email})')
        return ServiceResult.ok(user, 'Account created successfully!')
