import logging

from celery import shared_task

logger = logging.getLogger(__name__)


@shared_task(
    autoretry_for=(Exception,),
    retry_backoff=True,
    retry_backoff_max=300,
    max_retries=3,
)
def send_tutor_access_notification(profile_id):
    from .models import TutorProfile
    from .notifications import notify_tutor_access_request
    try:
        profile = TutorProfile.objects.select_related('user').get(id=profile_id)
    except TutorProfile.DoesNotExist:
        logger.error('Tutor profile %s not found for notification', profile_id)
        return
    notify_tutor_access_request(profile)


@shared_task(
    autoretry_for=(Exception,),
    retry_backoff=True,
    retry_backoff_max=300,
    max_retries=3,
)
def send_results_published_notification(exam_id):
    from .models import TutorExam, CandidateSession
    from .notifications import notify_results_published
    from .statistics import summarize
    try:
        exam = TutorExam.objects.select_related('tutor').get(id=exam_id)
    except TutorExam.DoesNotExist:
        logger.error('Exam %s not found for notification', exam_id)
        return
    sessions = list(CandidateSession.objects.filter(exam=exam))
    notify_results_published(exam, summarize(sessions, exam.total_questions))
