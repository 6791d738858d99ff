"""Results publication: render artifacts, then close the exam."""
import logging

from django.db import transaction
from django.db.models import Count, Q
from django.utils import timezone

from .errors import NotFound, NotAvailable, NothingToPublish
from .models import TutorExam, CandidateSession
from .rendering import ResultRenderer
from .statistics import rank_sessions, summarize, session_counts

logger = logging.getLogger(__name__)


def get_tutor_exam(exam_id, tutor):
    try:
        return TutorExam.objects.get(id=exam_id, tutor=tutor)
    except TutorExam.DoesNotExist:
        raise NotFound('Exam not found')


def list_exams(tutor):
    """The tutor's exams, newest first, with their submitted-session counts."""
    return (
        TutorExam.objects
        .filter(tutor=tutor)
        .annotate(submission_count=Count(
            'sessions', filter=Q(sessions__status=CandidateSession.Status.SUBMITTED),
        ))
        .order_by('-created_at')
    )


def exam_stats(exam_id, tutor):
    exam = get_tutor_exam(exam_id, tutor)
    sessions = list(
        CandidateSession.objects
        .filter(exam=exam)
        .order_by('-submitted_at', '-started_at')
    )
    return exam, sessions, session_counts(sessions)


def publish_results(exam_id, tutor, renderer=None):
    """Render the result artifacts and close the exam.

    The exam row is locked before its status is checked and held while the
    artifacts are rendered, so concurrent publishes of one exam serialize and
    only the first renders. If rendering fails the exam stays active and
    publication can be retried.
    """
    exam = get_tutor_exam(exam_id, tutor)
    renderer = renderer or ResultRenderer()

    with transaction.atomic():
        exam = TutorExam.objects.select_for_update().get(id=exam.id)
        if exam.status != TutorExam.Status.ACTIVE:
            raise NotAvailable('Results already published', status=exam.status)

        # All sessions are loaded; only submitted ones are ranked.
        sessions = list(CandidateSession.objects.filter(exam=exam).order_by('started_at'))
        ranked = rank_sessions(sessions, exam.total_questions)
        if not ranked:
            raise NothingToPublish()

        try:
            master_ref = renderer.render_master_sheet(exam, ranked)
            slips_ref = renderer.render_individual_slips(exam, ranked)
        except Exception:
            logger.exception('Rendering results for exam %s failed; exam left active', exam.id)
            raise

        exam.close(
            published_at=timezone.now(),
            master_sheet_ref=master_ref,
            individual_slips_ref=slips_ref,
        )
        exam_id = str(exam.id)
        transaction.on_commit(lambda: _queue_published_notification(exam_id))

    logger.info(
        'Tutor %s published results for exam %s: %d ranked of %d sessions',
        tutor.username, exam.id, len(ranked), len(sessions),
    )
    return {
        'master_artifact_ref': master_ref,
        'individual_artifact_ref': slips_ref,
        'exam': exam,
        'summary': summarize(sessions, exam.total_questions),
    }


def _queue_published_notification(exam_id):
    from .tasks import send_results_published_notification
    try:
        send_results_published_notification.delay(exam_id)
    except Exception:
        logger.exception('Could not queue results notification for exam %s', exam_id)
