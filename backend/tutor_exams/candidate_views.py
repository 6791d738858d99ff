from rest_framework import status
from rest_framework.decorators import api_view, authentication_classes, permission_classes, throttle_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle

from .admission import public_summary, admit_candidate
from .grading import submit_session
from .serializers import (
    StartExamSerializer,
    SubmitExamSerializer,
    CandidateQuestionSerializer,
    CandidateStartedSessionSerializer,
)

# Candidates are anonymous; any Authorization header is ignored.
candidate_auth = []
candidate_perm = [AllowAny]


class CandidateRateThrottle(AnonRateThrottle):
    scope = 'candidate'


candidate_throttle = [CandidateRateThrottle]


@api_view(['GET'])
@authentication_classes(candidate_auth)
@permission_classes(candidate_perm)
@throttle_classes(candidate_throttle)
def exam_summary(request, exam_id):
    return Response(public_summary(exam_id))


@api_view(['POST'])
@authentication_classes(candidate_auth)
@permission_classes(candidate_perm)
@throttle_classes(candidate_throttle)
def start_exam(request, exam_id):
    serializer = StartExamSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    session, locked = admit_candidate(
        exam_id,
        data.get('candidate_name'),
        data.get('candidate_class'),
        data.get('candidate_school'),
    )
    return Response({
        'session': CandidateStartedSessionSerializer(session).data,
        'questions': CandidateQuestionSerializer(locked, many=True).data,
    }, status=status.HTTP_201_CREATED)


@api_view(['POST'])
@authentication_classes(candidate_auth)
@permission_classes(candidate_perm)
@throttle_classes(candidate_throttle)
def submit_exam(request, session_id):
    serializer = SubmitExamSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    session = submit_session(session_id, serializer.validated_data.get('responses') or {})
    return Response({'message': 'Exam submitted successfully', 'status': session.status})
