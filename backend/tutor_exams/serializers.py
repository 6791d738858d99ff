from django.utils import timezone
from rest_framework import serializers

from .models import (
    ExamBody, Category, QuestionOption, TutorProfile, TutorExam,
    SubjectWeight, LockedQuestion, CandidateSession,
)


class TutorProfileSerializer(serializers.ModelSerializer):
    class Meta:
        model = TutorProfile
        fields = ['id', 'status', 'student_quota', 'created_at']


# ---------------------------------------------------------------------------
# Tutor: exam creation and review
# ---------------------------------------------------------------------------

class SubjectWeightInputSerializer(serializers.Serializer):
    subject_id = serializers.IntegerField()
    count = serializers.IntegerField(min_value=1)


class TutorExamCreateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=255)
    exam_body_id = serializers.PrimaryKeyRelatedField(queryset=ExamBody.objects.all())
    category_id = serializers.PrimaryKeyRelatedField(queryset=Category.objects.all())
    time_limit_minutes = serializers.IntegerField(min_value=1, required=False)
    expires_at = serializers.DateTimeField()
    max_candidates = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    subject_weights = SubjectWeightInputSerializer(many=True, allow_empty=False)

    def validate_expires_at(self, value):
        if value <= timezone.now():
            raise serializers.ValidationError('Expiry must be in the future')
        return value

    def validate_subject_weights(self, value):
        subject_ids = [w['subject_id'] for w in value]
        if len(subject_ids) != len(set(subject_ids)):
            raise serializers.ValidationError('Each subject may appear only once')
        return value

    def validate(self, attrs):
        if attrs['category_id'].exam_body_id != attrs['exam_body_id'].id:
            raise serializers.ValidationError({'category_id': 'Category does not belong to this exam body'})
        return attrs


class TutorExamSerializer(serializers.ModelSerializer):
    exam_body_id = serializers.IntegerField(read_only=True)
    category_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = TutorExam
        fields = [
            'id', 'title', 'exam_body_id', 'category_id', 'total_questions',
            'time_limit_minutes', 'expires_at', 'max_candidates', 'status',
            'created_at', 'published_at', 'master_sheet_ref', 'individual_slips_ref',
        ]


class TutorExamListSerializer(serializers.ModelSerializer):
    submission_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = TutorExam
        fields = [
            'id', 'title', 'status', 'expires_at', 'total_questions',
            'max_candidates', 'created_at', 'submission_count',
        ]


class SubjectWeightSerializer(serializers.ModelSerializer):
    subject_name = serializers.CharField(source='subject.name', read_only=True)

    class Meta:
        model = SubjectWeight
        fields = ['subject_id', 'subject_name', 'question_count']


class ReviewOptionSerializer(serializers.ModelSerializer):
    class Meta:
        model = QuestionOption
        fields = ['id', 'text', 'is_correct']


class LockedQuestionReviewSerializer(serializers.ModelSerializer):
    text = serializers.CharField(source='question.text', read_only=True)
    options = ReviewOptionSerializer(source='question.options', many=True, read_only=True)

    class Meta:
        model = LockedQuestion
        fields = ['question_id', 'subject_id', 'text', 'correct_option_id', 'options']


class CandidateSessionSerializer(serializers.ModelSerializer):
    class Meta:
        model = CandidateSession
        fields = [
            'id', 'candidate_name', 'candidate_class', 'candidate_school',
            'status', 'score', 'started_at', 'submitted_at',
        ]


# ---------------------------------------------------------------------------
# Candidate-facing
# ---------------------------------------------------------------------------

class StartExamSerializer(serializers.Serializer):
    # Presence is checked by admission so that a missing field is reported
    # as missing candidate info rather than a field error.
    candidate_name = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)
    candidate_class = serializers.CharField(max_length=100, required=False, allow_blank=True, allow_null=True)
    candidate_school = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)


class SubmitExamSerializer(serializers.Serializer):
    responses = serializers.DictField(required=False, allow_empty=True)


class CandidateOptionSerializer(serializers.ModelSerializer):
    class Meta:
        model = QuestionOption
        fields = ['id', 'text']


class CandidateQuestionSerializer(serializers.Serializer):
    id = serializers.IntegerField(source='question_id')
    subject_id = serializers.IntegerField()
    text = serializers.CharField(source='question.text')
    options = CandidateOptionSerializer(source='question.options', many=True)


class CandidateStartedSessionSerializer(serializers.ModelSerializer):
    exam_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = CandidateSession
        fields = ['id', 'exam_id', 'candidate_name', 'candidate_class', 'candidate_school', 'status', 'started_at']
