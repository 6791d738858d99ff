from django.urls import path
from rest_framework.throttling import AnonRateThrottle
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView
from . import candidate_views, tutor_views


class LoginRateThrottle(AnonRateThrottle):
    rate = '5/minute'


urlpatterns = [
    # JWT token endpoints (rate-limited to prevent brute force)
    path('token/', TokenObtainPairView.as_view(throttle_classes=[LoginRateThrottle]), name='token-obtain'),
    path('token/refresh/', TokenRefreshView.as_view(), name='token-refresh'),

    # Tutor
    path('tutor/request-access/', tutor_views.request_access, name='tutor-request-access'),
    path('tutor/profile/', tutor_views.tutor_profile, name='tutor-profile'),
    path('tutor/exams/', tutor_views.tutor_exams, name='tutor-exams'),
    path('tutor/exams/<uuid:exam_id>/', tutor_views.tutor_exam_detail, name='tutor-exam-detail'),
    path('tutor/exams/<uuid:exam_id>/stats/', tutor_views.tutor_exam_stats, name='tutor-exam-stats'),
    path('tutor/exams/<uuid:exam_id>/publish-results/', tutor_views.publish_results, name='tutor-publish-results'),

    # Candidate
    path('exams/<uuid:exam_id>/', candidate_views.exam_summary, name='exam-summary'),
    path('exams/<uuid:exam_id>/start/', candidate_views.start_exam, name='start-exam'),
    path('sessions/<uuid:session_id>/submit/', candidate_views.submit_exam, name='submit-exam'),
]
