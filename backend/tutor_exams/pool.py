"""Read-only view of the shared question bank."""
from django.db.models import Prefetch

from .models import Question, QuestionOption


def questions_by_subject(subject_id, status=Question.Status.LIVE):
    return (
        Question.objects
        .filter(subject_id=subject_id, status=status)
        .prefetch_related(Prefetch('options', queryset=QuestionOption.objects.order_by('order', 'id')))
        .order_by('id')
    )


def correct_option_id(question):
    """Id of the option currently marked correct, or None.

    Uses prefetched options when present.
    """
    for option in question.options.all():
        if option.is_correct:
            return option.id
    return None


def current_correct_options(question_ids):
    """Map question id -> id of its currently-correct option."""
    return dict(
        QuestionOption.objects
        .filter(question_id__in=question_ids, is_correct=True)
        .values_list('question_id', 'id')
    )
