import threading

from django.db import connection
from django.test import TransactionTestCase, skipUnlessDBFeature

from tutor_exams.admission import admit_candidate
from tutor_exams.errors import CapacityReached, DuplicateCandidate, AlreadySubmitted, NotAvailable
from tutor_exams.grading import submit_session
from tutor_exams.models import CandidateSession, CandidateAnswer, TutorExam
from tutor_exams.publication import publish_results
from tests.helpers import make_tutor, make_pool, make_exam


def _run_concurrently(fn, args_list):
    """Run fn(*args) in one thread per args tuple; collect results or errors."""
    outcomes = []
    lock = threading.Lock()
    barrier = threading.Barrier(len(args_list))

    def worker(args):
        try:
            barrier.wait()
            result = fn(*args)
        except Exception as exc:
            result = exc
        finally:
            connection.close()
        with lock:
            outcomes.append(result)

    threads = [threading.Thread(target=worker, args=(args,)) for args in args_list]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    return outcomes


@skipUnlessDBFeature('has_select_for_update')
class TestConcurrentAdmission(TransactionTestCase):
    """Row locking under concurrent starts, submits and publishes.

    Needs SELECT ... FOR UPDATE, so it is skipped on SQLite. Run the suite
    with DB_HOST (and DB_NAME, DB_USER, DB_PASSWORD) pointing at PostgreSQL
    to exercise it.
    """

    def setUp(self):
        tutor = make_tutor()
        body, category, subjects = make_pool(subjects=(('Mathematics', 3),))
        self.exam = make_exam(tutor, body, category, [(subjects['Mathematics'], 2)], max_candidates=5)

    def test_capacity_never_exceeded(self):
        args = [(self.exam.id, f'Candidate {i}', 'SS1', 'School') for i in range(20)]
        outcomes = _run_concurrently(admit_candidate, args)

        admitted = [o for o in outcomes if isinstance(o, tuple)]
        rejected = [o for o in outcomes if isinstance(o, CapacityReached)]
        self.assertEqual(len(admitted), 5)
        self.assertEqual(len(rejected), 15)
        self.assertEqual(CandidateSession.objects.filter(exam=self.exam).count(), 5)

    def test_same_candidate_admitted_once(self):
        args = [(self.exam.id, 'Ada', 'SS2', 'Hope High')] * 8
        outcomes = _run_concurrently(admit_candidate, args)

        admitted = [o for o in outcomes if isinstance(o, tuple)]
        duplicates = [o for o in outcomes if isinstance(o, DuplicateCandidate)]
        self.assertEqual(len(admitted), 1)
        self.assertEqual(len(duplicates), 7)
        self.assertEqual(CandidateSession.objects.filter(exam=self.exam).count(), 1)

    def test_session_graded_once(self):
        session, _ = admit_candidate(self.exam.id, 'Ada', 'SS2', 'Hope High')
        outcomes = _run_concurrently(submit_session, [(session.id, {})] * 4)

        self.assertEqual(sum(1 for o in outcomes if isinstance(o, CandidateSession)), 1)
        self.assertEqual(sum(1 for o in outcomes if isinstance(o, AlreadySubmitted)), 3)
        self.assertEqual(CandidateAnswer.objects.filter(session=session).count(), 2)

    def test_exam_published_once(self):
        session, _ = admit_candidate(self.exam.id, 'Ada', 'SS2', 'Hope High')
        submit_session(session.id, {})
        tutor = self.exam.tutor

        outcomes = _run_concurrently(publish_results, [(self.exam.id, tutor)] * 3)

        published = [o for o in outcomes if isinstance(o, dict)]
        self.assertEqual(len(published), 1)
        self.assertEqual(sum(1 for o in outcomes if isinstance(o, NotAvailable)), 2)
        exam = TutorExam.objects.get(id=self.exam.id)
        self.assertEqual(exam.status, TutorExam.Status.CLOSED)
        self.assertEqual(exam.master_sheet_ref, published[0]['master_artifact_ref'])
