from datetime import timedelta

from django.test import SimpleTestCase
from django.utils import timezone

from tutor_exams.models import CandidateSession
from tutor_exams.statistics import percentage, rank_sessions, summarize, session_counts

T0 = timezone.now()


def _session(name, score, minute, status=CandidateSession.Status.SUBMITTED):
    return CandidateSession(
        candidate_name=name,
        candidate_class='SS3',
        candidate_school='School',
        status=status,
        score=score if status == CandidateSession.Status.SUBMITTED else None,
        submitted_at=T0 + timedelta(minutes=minute) if status == CandidateSession.Status.SUBMITTED else None,
    )


class TestPercentage(SimpleTestCase):
    def test_rounds_to_whole_percent(self):
        self.assertEqual(percentage(1, 3), 33)
        self.assertEqual(percentage(2, 3), 67)

    def test_zero_total(self):
        self.assertEqual(percentage(5, 0), 0)


class TestRankSessions(SimpleTestCase):
    def test_competition_ranking_with_ties(self):
        sessions = [
            _session('Dayo', 4, minute=1),
            _session('Ada', 9, minute=5),
            _session('Bola', 7, minute=3),
            _session('Chidi', 7, minute=2),
        ]
        ranked = rank_sessions(sessions, 10)
        self.assertEqual(
            [(r['session'].candidate_name, r['rank']) for r in ranked],
            [('Ada', 1), ('Chidi', 2), ('Bola', 2), ('Dayo', 4)],
        )
        self.assertEqual(ranked[0]['percentage'], 90)

    def test_in_progress_sessions_excluded(self):
        sessions = [
            _session('Ada', 3, minute=1),
            _session('Bola', None, minute=0, status=CandidateSession.Status.IN_PROGRESS),
        ]
        ranked = rank_sessions(sessions, 5)
        self.assertEqual(len(ranked), 1)
        self.assertEqual(ranked[0]['session'].candidate_name, 'Ada')

    def test_no_submissions(self):
        self.assertEqual(rank_sessions([], 5), [])


class TestSummarize(SimpleTestCase):
    def test_distribution_of_submitted_scores(self):
        sessions = [
            _session('A', 2, 1),
            _session('B', 4, 2),
            _session('C', 6, 3),
            _session('D', None, 0, status=CandidateSession.Status.IN_PROGRESS),
        ]
        stats = summarize(sessions, 10)
        self.assertEqual(stats['candidates'], 3)
        self.assertEqual(stats['mean_score'], 4.0)
        self.assertEqual(stats['median_score'], 4.0)
        self.assertEqual(stats['highest_score'], 6)
        self.assertEqual(stats['lowest_score'], 2)
        self.assertEqual(stats['mean_percentage'], 40.0)
        self.assertAlmostEqual(stats['std_dev'], 1.63, places=2)

    def test_empty(self):
        stats = summarize([], 10)
        self.assertEqual(stats['candidates'], 0)
        self.assertEqual(stats['mean_score'], 0.0)


class TestSessionCounts(SimpleTestCase):
    def test_counts_and_average_over_submitted(self):
        sessions = [
            _session('A', 1, 1),
            _session('B', 2, 2),
            _session('C', None, 0, status=CandidateSession.Status.IN_PROGRESS),
        ]
        self.assertEqual(session_counts(sessions), {
            'total': 3,
            'submitted': 2,
            'in_progress': 1,
            'average_score': 1.5,
        })

    def test_average_is_zero_without_submissions(self):
        sessions = [_session('C', None, 0, status=CandidateSession.Status.IN_PROGRESS)]
        self.assertEqual(session_counts(sessions)['average_score'], 0.0)
