from django.core.cache import cache
from django.test import TestCase, override_settings
from rest_framework.test import APIClient

from tutor_exams.admission import admit_candidate
from tutor_exams.grading import submit_session
from tests.helpers import make_tutor, make_pool, make_exam, tutor_client


@override_settings(SECURE_SSL_REDIRECT=False)
class TestCandidateContract(TestCase):
    """Verify candidate responses carry the exact field names the frontend expects."""

    def setUp(self):
        cache.clear()
        tutor = make_tutor()
        body, category, subjects = make_pool()
        self.exam = make_exam(tutor, body, category, [(subjects['Mathematics'], 1)])
        self.client = APIClient()

    def test_summary_fields(self):
        data = self.client.get(f'/api/exams/{self.exam.id}/').json()
        for field in ['id', 'title', 'total_questions', 'time_limit_minutes', 'status', 'expires_at']:
            self.assertIn(field, data, f"Missing field: {field}")

    def test_start_fields(self):
        data = self.client.post(f'/api/exams/{self.exam.id}/start/', {
            'candidate_name': 'Ada', 'candidate_class': 'SS2', 'candidate_school': 'Hope High',
        }, format='json').json()

        for field in ['id', 'exam_id', 'candidate_name', 'candidate_class', 'candidate_school', 'status', 'started_at']:
            self.assertIn(field, data['session'], f"Missing session field: {field}")
        question = data['questions'][0]
        for field in ['id', 'subject_id', 'text', 'options']:
            self.assertIn(field, question, f"Missing question field: {field}")

    def test_error_fields(self):
        data = self.client.post(f'/api/exams/{self.exam.id}/start/', {}, format='json').json()
        self.assertEqual(set(data), {'error', 'code'})


@override_settings(SECURE_SSL_REDIRECT=False)
class TestTutorContract(TestCase):
    """Verify tutor responses carry the exact field names the frontend expects."""

    def setUp(self):
        cache.clear()
        self.client, tutor = tutor_client()
        body, category, subjects = make_pool()
        self.exam = make_exam(tutor, body, category, [(subjects['Mathematics'], 1)])
        session, _ = admit_candidate(self.exam.id, 'Ada', 'SS2', 'Hope High')
        submit_session(session.id, {})

    def test_list_fields(self):
        item = self.client.get('/api/tutor/exams/').json()[0]
        for field in ['id', 'title', 'status', 'expires_at', 'total_questions', 'max_candidates',
                      'created_at', 'submission_count']:
            self.assertIn(field, item, f"Missing field: {field}")

    def test_stats_fields(self):
        data = self.client.get(f'/api/tutor/exams/{self.exam.id}/stats/').json()
        for field in ['exam', 'sessions', 'stats']:
            self.assertIn(field, data, f"Missing field: {field}")
        for field in ['total', 'submitted', 'in_progress', 'average_score']:
            self.assertIn(field, data['stats'], f"Missing stats field: {field}")
        for field in ['id', 'candidate_name', 'candidate_class', 'candidate_school', 'status', 'score',
                      'started_at', 'submitted_at']:
            self.assertIn(field, data['sessions'][0], f"Missing session field: {field}")

    def test_publish_fields(self):
        data = self.client.post(f'/api/tutor/exams/{self.exam.id}/publish-results/').json()
        for field in ['master_artifact_ref', 'individual_artifact_ref', 'exam', 'summary']:
            self.assertIn(field, data, f"Missing field: {field}")
        for field in ['candidates', 'mean_score', 'median_score', 'highest_score', 'lowest_score',
                      'std_dev', 'mean_percentage']:
            self.assertIn(field, data['summary'], f"Missing summary field: {field}")
