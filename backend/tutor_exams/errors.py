"""Expected, user-facing failures of the tutor exam flows.

Each error carries a stable ``code`` and optional structured fields so that
callers can branch on the outcome without parsing the message.
"""
from rest_framework import status
from rest_framework.exceptions import APIException


class TutorExamError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Request could not be completed'
    default_code = 'error'

    def __init__(self, detail=None, **extra):
        super().__init__(detail=detail or self.default_detail, code=self.default_code)
        self.extra = extra

    @property
    def code(self):
        return self.default_code

    def as_payload(self):
        return {'error': str(self.detail), 'code': self.code, **self.extra}


class Forbidden(TutorExamError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'Tutor account not approved'
    default_code = 'forbidden'


class NotFound(TutorExamError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Not found'
    default_code = 'not_found'


class InsufficientPool(TutorExamError):
    default_code = 'insufficient_pool'

    def __init__(self, subject_id, requested, available):
        super().__init__(
            f'Not enough live questions for subject {subject_id}: '
            f'requested {requested}, available {available}',
            subject_id=subject_id,
            requested=requested,
            available=available,
            deficit=requested - available,
        )


class CapacityReached(TutorExamError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'Exam candidate limit reached'
    default_code = 'capacity_reached'


class DuplicateCandidate(TutorExamError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'A candidate with these details has already started this exam'
    default_code = 'duplicate_candidate'


class MissingCandidateInfo(TutorExamError):
    default_detail = 'Candidate name, class and school are required'
    default_code = 'missing_candidate_info'


class NotAvailable(TutorExamError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'Exam is not active'
    default_code = 'not_available'


class Expired(TutorExamError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'Exam has expired'
    default_code = 'expired'


class AlreadySubmitted(TutorExamError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'Exam already submitted'
    default_code = 'already_submitted'


class NothingToPublish(TutorExamError):
    default_detail = 'No submitted sessions to publish'
    default_code = 'nothing_to_publish'


class ProfileExists(TutorExamError):
    default_detail = 'Request already submitted'
    default_code = 'profile_exists'


class IllegalTransition(TutorExamError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Illegal status transition'
    default_code = 'illegal_transition'
