import random
from datetime import timedelta

from django.contrib.auth.models import User
from django.utils import timezone
from rest_framework.test import APIClient

from tutor_exams.models import (
    ExamBody, Category, Subject, Question, QuestionOption, TutorProfile,
)
from tutor_exams.sampling import create_exam


def make_tutor(username='tutor', status=TutorProfile.Status.APPROVED, quota=10):
    """Create a User with a TutorProfile and return the user."""
    user = User.objects.create_user(username, f'{username}@test.com', 'testpass123')
    TutorProfile.objects.create(user=user, status=status, student_quota=quota)
    return user


def tutor_client(user=None):
    """Return an APIClient authenticated as the given tutor user."""
    if user is None:
        user = make_tutor()
    client = APIClient()
    client.force_authenticate(user=user)
    return client, user


def make_question(subject, text, options=4, correct=0, status=Question.Status.LIVE):
    question = Question.objects.create(subject=subject, text=text, status=status)
    for k in range(options):
        QuestionOption.objects.create(
            question=question,
            text=f'{text} option {k}',
            order=k,
            is_correct=(k == correct),
        )
    return question


def make_pool(subjects=(('Mathematics', 5), ('English', 3)), exam_body='WAEC', category='Science'):
    """Create an exam body, a category and live questions per subject.

    Returns ``(exam_body, category, {subject_name: Subject})``. The first
    option (order 0) of every question is the correct one.
    """
    body = ExamBody.objects.create(name=exam_body)
    cat = Category.objects.create(exam_body=body, name=category)
    by_name = {}
    for name, count in subjects:
        subject = Subject.objects.create(category=cat, name=name)
        for i in range(count):
            make_question(subject, f'{name} Q{i + 1}')
        by_name[name] = subject
    return body, cat, by_name


def make_exam(tutor, body, category, weights, max_candidates=None, expires_in=120, title='Mock Exam', seed=1):
    """Create an exam through the sampler; weights is [(Subject, count), ...]."""
    return create_exam(
        tutor,
        title=title,
        exam_body_id=body.id,
        category_id=category.id,
        expires_at=timezone.now() + timedelta(minutes=expires_in),
        subject_weights=[(subject.id, count) for subject, count in weights],
        max_candidates=max_candidates,
        rng=random.Random(seed),
    )


def correct_option(question):
    return question.options.get(is_correct=True)


def wrong_option(question):
    return question.options.filter(is_correct=False).first()
