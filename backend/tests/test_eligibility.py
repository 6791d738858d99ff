from unittest.mock import patch

from django.contrib.auth.models import User
from django.core.cache import cache
from django.test import TestCase

from tutor_exams.eligibility import require_approved_tutor, resolve_max_candidates, request_tutor_access
from tutor_exams.errors import Forbidden, ProfileExists
from tutor_exams.models import TutorProfile
from tutor_exams.permissions import tutor_cache_key
from tests.helpers import make_tutor


class TestApprovedTutorGate(TestCase):
    def test_approved_tutor_passes(self):
        user = make_tutor()
        profile = require_approved_tutor(user)
        self.assertEqual(profile.user, user)

    def test_pending_tutor_is_forbidden(self):
        user = make_tutor(status=TutorProfile.Status.PENDING)
        with self.assertRaises(Forbidden):
            require_approved_tutor(user)

    def test_rejected_tutor_is_forbidden(self):
        user = make_tutor(status=TutorProfile.Status.REJECTED)
        with self.assertRaises(Forbidden):
            require_approved_tutor(user)

    def test_user_without_profile_is_forbidden(self):
        user = User.objects.create_user('plain', 'plain@test.com', 'pw')
        with self.assertRaises(Forbidden) as ctx:
            require_approved_tutor(user)
        self.assertEqual(ctx.exception.code, 'forbidden')


class TestResolveMaxCandidates(TestCase):
    def setUp(self):
        self.profile = make_tutor(quota=25).tutor_profile

    def test_falls_back_to_student_quota(self):
        self.assertEqual(resolve_max_candidates(self.profile), 25)

    def test_requested_value_wins(self):
        self.assertEqual(resolve_max_candidates(self.profile, 3), 3)


class TestRequestTutorAccess(TestCase):
    def setUp(self):
        cache.clear()
        self.user = User.objects.create_user('applicant', 'a@test.com', 'pw')

    def test_creates_pending_profile_with_zero_quota(self):
        profile = request_tutor_access(self.user)
        self.assertEqual(profile.status, TutorProfile.Status.PENDING)
        self.assertEqual(profile.student_quota, 0)

    def test_second_request_reports_current_status(self):
        request_tutor_access(self.user)
        with self.assertRaises(ProfileExists) as ctx:
            request_tutor_access(self.user)
        self.assertEqual(ctx.exception.as_payload()['status'], 'pending')
        self.assertEqual(TutorProfile.objects.filter(user=self.user).count(), 1)

    def test_notification_is_queued_after_commit(self):
        with patch('tutor_exams.tasks.send_tutor_access_notification.delay') as mock_delay:
            with self.captureOnCommitCallbacks(execute=True):
                profile = request_tutor_access(self.user)
        mock_delay.assert_called_once_with(profile.id)

    def test_profile_save_drops_cached_profile(self):
        profile = request_tutor_access(self.user)
        cache.set(tutor_cache_key(self.user.id), profile)
        profile.status = TutorProfile.Status.APPROVED
        profile.save()
        self.assertIsNone(cache.get(tutor_cache_key(self.user.id)))
