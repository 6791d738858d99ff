"""Stratified question sampling and the answer-key lock.

An exam's question set is drawn once, per subject, from the live pool and
frozen into LockedQuestion rows together with the exam itself.
"""
import logging
import random

from django.conf import settings
from django.db import transaction
from rest_framework.exceptions import ValidationError

from .eligibility import require_approved_tutor, resolve_max_candidates
from .errors import InsufficientPool
from .models import TutorExam, SubjectWeight, LockedQuestion
from .pool import questions_by_subject, correct_option_id

logger = logging.getLogger(__name__)


def draw_questions(subject_weights, rng=None):
    """Draw ``count`` live questions per subject, uniformly without replacement.

    Returns a list of ``(subject_id, [Question, ...])`` in request order.
    Raises InsufficientPool for the first subject whose live pool is smaller
    than its quota; nothing is drawn for any subject in that case.
    """
    rng = rng or random
    pools = []
    for subject_id, count in subject_weights:
        available = list(questions_by_subject(subject_id))
        if len(available) < count:
            raise InsufficientPool(subject_id, count, len(available))
        pools.append((subject_id, count, available))

    return [(subject_id, rng.sample(available, count)) for subject_id, count, available in pools]


def _validate_weights(subject_weights):
    if not subject_weights:
        raise ValidationError({'subject_weights': 'At least one subject is required'})
    seen = set()
    for subject_id, count in subject_weights:
        if count < 1:
            raise ValidationError({'subject_weights': f'Count for subject {subject_id} must be at least 1'})
        if subject_id in seen:
            raise ValidationError({'subject_weights': f'Subject {subject_id} listed more than once'})
        seen.add(subject_id)


def create_exam(
    tutor,
    *,
    title,
    exam_body_id,
    category_id,
    expires_at,
    subject_weights,
    time_limit_minutes=None,
    max_candidates=None,
    rng=None,
):
    """Create an active exam with its locked question set.

    The exam, its subject weights and its locked questions are written in a
    single transaction; a failed draw writes nothing.
    """
    profile = require_approved_tutor(tutor)
    subject_weights = [(subject_id, int(count)) for subject_id, count in subject_weights]
    _validate_weights(subject_weights)

    drawn = draw_questions(subject_weights, rng=rng)
    total_questions = sum(count for _, count in subject_weights)
    if time_limit_minutes is None:
        time_limit_minutes = settings.TUTOR_EXAMS['DEFAULT_TIME_LIMIT_MINUTES']

    with transaction.atomic():
        exam = TutorExam.objects.create(
            tutor=tutor,
            exam_body_id=exam_body_id,
            category_id=category_id,
            title=title,
            total_questions=total_questions,
            time_limit_minutes=time_limit_minutes,
            expires_at=expires_at,
            max_candidates=resolve_max_candidates(profile, max_candidates),
            status=TutorExam.Status.ACTIVE,
        )
        SubjectWeight.objects.bulk_create([
            SubjectWeight(exam=exam, subject_id=subject_id, question_count=count)
            for subject_id, count in subject_weights
        ])
        LockedQuestion.objects.bulk_create([
            LockedQuestion(
                exam=exam,
                question=question,
                subject_id=subject_id,
                correct_option_id=correct_option_id(question),
            )
            for subject_id, questions in drawn
            for question in questions
        ])

    logger.info(
        'Tutor %s created exam %s (%s): %d questions over %d subjects, max %d candidates',
        tutor.username, exam.id, exam.title, total_questions, len(subject_weights), exam.max_candidates,
    )
    return exam
