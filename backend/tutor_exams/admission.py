"""Anonymous candidate entry: exam summary and session admission."""
import logging

from django.db import IntegrityError, transaction
from django.db.models import Prefetch
from django.utils import timezone

from .errors import (
    NotFound,
    NotAvailable,
    Expired,
    CapacityReached,
    DuplicateCandidate,
    MissingCandidateInfo,
)
from .models import TutorExam, CandidateSession, LockedQuestion, QuestionOption

logger = logging.getLogger(__name__)


def ensure_open(exam, now=None):
    """Raise unless the exam currently admits candidates."""
    now = now or timezone.now()
    if exam.status != TutorExam.Status.ACTIVE:
        raise NotAvailable(status=exam.status)
    if now >= exam.expires_at:
        raise Expired()


def public_summary(exam_id):
    try:
        exam = TutorExam.objects.get(id=exam_id)
    except TutorExam.DoesNotExist:
        raise NotFound('Exam not found')

    ensure_open(exam)
    return {
        'id': str(exam.id),
        'title': exam.title,
        'total_questions': exam.total_questions,
        'time_limit_minutes': exam.time_limit_minutes,
        'status': exam.status,
        'expires_at': exam.expires_at.isoformat(),
    }


def locked_questions_for(exam):
    """Locked questions of an exam joined to their current text and options."""
    return list(
        LockedQuestion.objects
        .filter(exam=exam)
        .select_related('question', 'subject')
        .prefetch_related(
            Prefetch('question__options', queryset=QuestionOption.objects.order_by('order', 'id')),
        )
        .order_by('id')
    )


def _clean(value):
    return value.strip() if isinstance(value, str) else ''


def admit_candidate(exam_id, candidate_name, candidate_class, candidate_school):
    """Admit a candidate or reject them, as one atomic decision.

    The exam row is locked for the duration of the capacity check, the
    duplicate check and the insert, so concurrent admissions to the same exam
    are serialized. The unique constraint on the candidate triple backs up the
    duplicate check.

    Returns ``(session, locked_questions)``.
    """
    name = _clean(candidate_name)
    klass = _clean(candidate_class)
    school = _clean(candidate_school)
    if not (name and klass and school):
        raise MissingCandidateInfo()

    try:
        with transaction.atomic():
            try:
                exam = TutorExam.objects.select_for_update().get(id=exam_id)
            except TutorExam.DoesNotExist:
                raise NotFound('Exam not found')

            ensure_open(exam)

            sessions = CandidateSession.objects.filter(exam=exam)
            if sessions.count() >= exam.max_candidates:
                logger.info('Exam %s rejected candidate %r: capacity %d reached', exam.id, name, exam.max_candidates)
                raise CapacityReached()

            if sessions.filter(
                candidate_name=name,
                candidate_class=klass,
                candidate_school=school,
            ).exists():
                raise DuplicateCandidate()

            session = CandidateSession.objects.create(
                exam=exam,
                candidate_name=name,
                candidate_class=klass,
                candidate_school=school,
                status=CandidateSession.Status.IN_PROGRESS,
            )
    except IntegrityError:
        raise DuplicateCandidate()

    logger.info('Candidate %r (%s, %s) admitted to exam %s as session %s', name, klass, school, exam.id, session.id)
    return session, locked_questions_for(exam)
