import uuid

from django.contrib.auth.models import User
from django.db import models

from .errors import IllegalTransition


# ---------------------------------------------------------------------------
# Question pool
# ---------------------------------------------------------------------------

class ExamBody(models.Model):
    name = models.CharField(max_length=255, unique=True)

    def __str__(self):
        return self.name


class Category(models.Model):
    exam_body = models.ForeignKey(ExamBody, on_delete=models.CASCADE, related_name='categories')
    name = models.CharField(max_length=255)

    class Meta:
        verbose_name_plural = 'categories'

    def __str__(self):
        return f"{self.exam_body} / {self.name}"


class Subject(models.Model):
    category = models.ForeignKey(Category, on_delete=models.CASCADE, related_name='subjects')
    name = models.CharField(max_length=255)

    def __str__(self):
        return self.name


class Question(models.Model):
    class Status(models.TextChoices):
        DRAFT = 'draft', 'Draft'
        LIVE = 'live', 'Live'
        ARCHIVED = 'archived', 'Archived'

    subject = models.ForeignKey(Subject, on_delete=models.PROTECT, related_name='questions')
    text = models.TextField()
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.DRAFT, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['subject', 'status'], name='idx_question_subject_status'),
        ]

    def __str__(self):
        return f"[{self.subject}] {self.text[:60]}"


class QuestionOption(models.Model):
    question = models.ForeignKey(Question, on_delete=models.CASCADE, related_name='options')
    text = models.TextField()
    order = models.PositiveSmallIntegerField(default=0)
    is_correct = models.BooleanField(default=False)

    class Meta:
        ordering = ['order', 'id']

    def __str__(self):
        mark = ' *' if self.is_correct else ''
        return f"{self.text[:40]}{mark}"


# ---------------------------------------------------------------------------
# Tutor exams
# ---------------------------------------------------------------------------

class TutorProfile(models.Model):
    class Status(models.TextChoices):
        PENDING = 'pending', 'Pending'
        APPROVED = 'approved', 'Approved'
        REJECTED = 'rejected', 'Rejected'

    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='tutor_profile')
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)
    student_quota = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.user.username} ({self.status})"

    @property
    def is_approved(self):
        return self.status == self.Status.APPROVED


class TutorExam(models.Model):
    class Status(models.TextChoices):
        ACTIVE = 'active', 'Active'
        CLOSED = 'closed', 'Closed'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    tutor = models.ForeignKey(User, on_delete=models.CASCADE, related_name='tutor_exams')
    exam_body = models.ForeignKey(ExamBody, on_delete=models.PROTECT, related_name='+')
    category = models.ForeignKey(Category, on_delete=models.PROTECT, related_name='+')
    title = models.CharField(max_length=255)
    total_questions = models.PositiveIntegerField()
    time_limit_minutes = models.PositiveIntegerField(default=60)
    expires_at = models.DateTimeField()
    max_candidates = models.PositiveIntegerField()
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.ACTIVE, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    published_at = models.DateTimeField(null=True, blank=True)
    master_sheet_ref = models.CharField(max_length=500, blank=True, default='')
    individual_slips_ref = models.CharField(max_length=500, blank=True, default='')

    class Meta:
        indexes = [
            models.Index(fields=['tutor', '-created_at'], name='idx_tutor_exam_created'),
        ]

    def __str__(self):
        return self.title

    def close(self, published_at, master_sheet_ref, individual_slips_ref):
        """The only status transition an exam has: active -> closed."""
        if self.status != self.Status.ACTIVE:
            raise IllegalTransition(f'Exam {self.id} is already {self.status}')
        self.status = self.Status.CLOSED
        self.published_at = published_at
        self.master_sheet_ref = master_sheet_ref
        self.individual_slips_ref = individual_slips_ref
        self.save(update_fields=['status', 'published_at', 'master_sheet_ref', 'individual_slips_ref'])


class SubjectWeight(models.Model):
    exam = models.ForeignKey(TutorExam, on_delete=models.CASCADE, related_name='subject_weights')
    subject = models.ForeignKey(Subject, on_delete=models.PROTECT, related_name='+')
    question_count = models.PositiveIntegerField()

    class Meta:
        unique_together = ('exam', 'subject')

    def __str__(self):
        return f"{self.subject}: {self.question_count}"


class LockedQuestion(models.Model):
    exam = models.ForeignKey(TutorExam, on_delete=models.CASCADE, related_name='locked_questions')
    question = models.ForeignKey(Question, on_delete=models.PROTECT, related_name='+')
    subject = models.ForeignKey(Subject, on_delete=models.PROTECT, related_name='+')
    correct_option = models.ForeignKey(
        QuestionOption, on_delete=models.PROTECT, null=True, blank=True, related_name='+',
        help_text="Option marked correct when the question was locked",
    )

    class Meta:
        unique_together = ('exam', 'question')

    def __str__(self):
        return f"{self.exam_id}: Q{self.question_id}"


class CandidateSession(models.Model):
    class Status(models.TextChoices):
        IN_PROGRESS = 'in_progress', 'In progress'
        SUBMITTED = 'submitted', 'Submitted'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    exam = models.ForeignKey(TutorExam, on_delete=models.CASCADE, related_name='sessions', db_index=True)
    candidate_name = models.CharField(max_length=255)
    candidate_class = models.CharField(max_length=100)
    candidate_school = models.CharField(max_length=255)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.IN_PROGRESS, db_index=True)
    score = models.IntegerField(null=True, blank=True)
    started_at = models.DateTimeField(auto_now_add=True)
    submitted_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=['exam', 'candidate_name', 'candidate_class', 'candidate_school'],
                name='uniq_candidate_per_exam',
            ),
        ]
        indexes = [
            models.Index(fields=['exam', 'status'], name='idx_candidate_exam_status'),
        ]

    def __str__(self):
        return f"{self.candidate_name} - {self.exam} ({self.status})"

    def mark_submitted(self, score, submitted_at):
        """The only status transition a session has: in_progress -> submitted."""
        if self.status != self.Status.IN_PROGRESS:
            raise IllegalTransition(f'Session {self.id} is already {self.status}')
        self.status = self.Status.SUBMITTED
        self.score = score
        self.submitted_at = submitted_at
        self.save(update_fields=['status', 'score', 'submitted_at'])


class CandidateAnswer(models.Model):
    session = models.ForeignKey(CandidateSession, on_delete=models.CASCADE, related_name='answers', db_index=True)
    question = models.ForeignKey(Question, on_delete=models.PROTECT, related_name='+')
    selected_option = models.ForeignKey(
        QuestionOption, on_delete=models.PROTECT, null=True, blank=True, related_name='+',
    )
    is_correct = models.BooleanField(default=False)

    class Meta:
        unique_together = ('session', 'question')

    def __str__(self):
        return f"{self.session_id}: Q{self.question_id} ({'ok' if self.is_correct else 'x'})"
