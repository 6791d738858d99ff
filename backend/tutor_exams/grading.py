import logging
from collections import defaultdict

from django.conf import settings
from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from .errors import NotFound, AlreadySubmitted
from .models import CandidateSession, CandidateAnswer, LockedQuestion, QuestionOption
from .pool import current_correct_options

logger = logging.getLogger(__name__)


def answer_key(exam_id):
    """Map each locked question id of an exam to its correct option id.

    Uses the option snapshot taken at lock time unless
    ``TUTOR_EXAMS['ANSWER_KEY_SOURCE']`` is ``'live'``.
    """
    locked = list(
        LockedQuestion.objects
        .filter(exam_id=exam_id)
        .order_by('id')
        .values_list('question_id', 'correct_option_id')
    )
    if settings.TUTOR_EXAMS.get('ANSWER_KEY_SOURCE', 'snapshot') == 'live':
        live = current_correct_options([question_id for question_id, _ in locked])
        return {question_id: live.get(question_id) for question_id, _ in locked}
    return dict(locked)


def _coerce_id(value):
    """An option id sent as an int or a string of digits; anything else is None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        value = value.strip()
        if value.isascii() and value.isdigit():
            return int(value)
    return None


def grade_responses(key, valid_options, responses):
    """Grade a response map against an answer key.

    *key* maps question id -> correct option id, *valid_options* maps
    question id -> set of that question's option ids, *responses* maps
    question id (int or str) -> selected option id. Every question in *key*
    is graded; missing, unknown or foreign selections count as unanswered.

    Returns ``(rows, score)`` where rows are
    ``(question_id, selected_option_id, is_correct)``.
    """
    selections = {str(question_id): option_id for question_id, option_id in responses.items()}

    rows = []
    score = 0
    for question_id, correct_id in key.items():
        selected = _coerce_id(selections.get(str(question_id)))
        if selected not in valid_options.get(question_id, ()):
            selected = None
        is_correct = selected is not None and selected == correct_id
        if is_correct:
            score += 1
        rows.append((question_id, selected, is_correct))
    return rows, score


def _options_by_question(question_ids):
    options = defaultdict(set)
    for question_id, option_id in (
        QuestionOption.objects
        .filter(question_id__in=question_ids)
        .values_list('question_id', 'id')
    ):
        options[question_id].add(option_id)
    return options


def submit_session(session_id, responses):
    """Grade a session and mark it submitted, all in one transaction.

    A session can be submitted once; later attempts raise AlreadySubmitted
    and leave the stored answers and score untouched.
    """
    if responses is None:
        responses = {}
    if not isinstance(responses, dict):
        raise ValidationError({'responses': 'Expected a mapping of question id to option id'})

    with transaction.atomic():
        try:
            session = CandidateSession.objects.select_for_update().get(id=session_id)
        except CandidateSession.DoesNotExist:
            raise NotFound('Session not found')

        if session.status == CandidateSession.Status.SUBMITTED:
            raise AlreadySubmitted()

        key = answer_key(session.exam_id)
        rows, score = grade_responses(key, _options_by_question(list(key)), responses)

        CandidateAnswer.objects.bulk_create([
            CandidateAnswer(
                session=session,
                question_id=question_id,
                selected_option_id=selected,
                is_correct=is_correct,
            )
            for question_id, selected, is_correct in rows
        ], batch_size=100)
        session.mark_submitted(score=score, submitted_at=timezone.now())

    logger.info('Session %s for exam %s submitted: %d/%d correct', session.id, session.exam_id, score, len(rows))
    return session
