import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from .admission import locked_questions_for
from .eligibility import request_tutor_access
from .errors import NotFound
from .permissions import IsTutor, current_tutor
from .publication import get_tutor_exam, list_exams, exam_stats, publish_results as publish_exam_results
from .sampling import create_exam
from .serializers import (
    TutorProfileSerializer,
    TutorExamCreateSerializer,
    TutorExamSerializer,
    TutorExamListSerializer,
    SubjectWeightSerializer,
    LockedQuestionReviewSerializer,
    CandidateSessionSerializer,
)

logger = logging.getLogger(__name__)
tutor_perm = [IsTutor]


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def request_access(request):
    profile = request_tutor_access(request.user)
    return Response(TutorProfileSerializer(profile).data, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def tutor_profile(request):
    profile = current_tutor(request)
    if profile is None:
        raise NotFound('Tutor profile not found')
    return Response(TutorProfileSerializer(profile).data)


@api_view(['GET', 'POST'])
@permission_classes(tutor_perm)
def tutor_exams(request):
    if request.method == 'POST':
        serializer = TutorExamCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        exam = create_exam(
            request.user,
            title=data['title'],
            exam_body_id=data['exam_body_id'].id,
            category_id=data['category_id'].id,
            expires_at=data['expires_at'],
            subject_weights=[(w['subject_id'], w['count']) for w in data['subject_weights']],
            time_limit_minutes=data.get('time_limit_minutes'),
            max_candidates=data.get('max_candidates'),
        )
        return Response(TutorExamSerializer(exam).data, status=status.HTTP_201_CREATED)

    return Response(TutorExamListSerializer(list_exams(request.user), many=True).data)


@api_view(['GET'])
@permission_classes(tutor_perm)
def tutor_exam_detail(request, exam_id):
    exam = get_tutor_exam(exam_id, request.user)
    weights = exam.subject_weights.select_related('subject').order_by('id')
    return Response({
        'exam': TutorExamSerializer(exam).data,
        'subject_weights': SubjectWeightSerializer(weights, many=True).data,
        'questions': LockedQuestionReviewSerializer(locked_questions_for(exam), many=True).data,
    })


@api_view(['GET'])
@permission_classes(tutor_perm)
def tutor_exam_stats(request, exam_id):
    exam, sessions, counts = exam_stats(exam_id, request.user)
    return Response({
        'exam': TutorExamSerializer(exam).data,
        'sessions': CandidateSessionSerializer(sessions, many=True).data,
        'stats': counts,
    })


@api_view(['POST'])
@permission_classes(tutor_perm)
def publish_results(request, exam_id):
    result = publish_exam_results(exam_id, request.user)
    return Response({
        'master_artifact_ref': result['master_artifact_ref'],
        'individual_artifact_ref': result['individual_artifact_ref'],
        'exam': TutorExamSerializer(result['exam']).data,
        'summary': result['summary'],
    })
