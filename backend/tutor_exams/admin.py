from django.contrib import admin
from .models import (
    ExamBody, Category, Subject, Question, QuestionOption, TutorProfile,
    TutorExam, SubjectWeight, LockedQuestion, CandidateSession, CandidateAnswer,
)


class QuestionOptionInline(admin.TabularInline):
    model = QuestionOption
    extra = 0


@admin.register(Question)
class QuestionAdmin(admin.ModelAdmin):
    list_display = ['text_short', 'subject', 'status', 'created_at']
    list_filter = ['status', 'subject__category__exam_body', 'subject']
    search_fields = ['text']
    inlines = [QuestionOptionInline]

    def text_short(self, obj):
        return obj.text[:80]
    text_short.short_description = 'Question'


@admin.register(TutorProfile)
class TutorProfileAdmin(admin.ModelAdmin):
    list_display = ['user', 'status', 'student_quota', 'created_at']
    list_filter = ['status']
    search_fields = ['user__username']
    actions = ['approve', 'reject']

    # Saved one by one so the post_save hook drops each cached profile.
    @admin.action(description='Approve selected tutors')
    def approve(self, request, queryset):
        for profile in queryset:
            profile.status = TutorProfile.Status.APPROVED
            profile.save(update_fields=['status'])

    @admin.action(description='Reject selected tutors')
    def reject(self, request, queryset):
        for profile in queryset:
            profile.status = TutorProfile.Status.REJECTED
            profile.save(update_fields=['status'])


@admin.register(TutorExam)
class TutorExamAdmin(admin.ModelAdmin):
    list_display = ['title', 'tutor', 'status', 'total_questions', 'max_candidates', 'expires_at', 'created_at']
    list_filter = ['status']
    readonly_fields = ['published_at', 'master_sheet_ref', 'individual_slips_ref']


@admin.register(CandidateSession)
class CandidateSessionAdmin(admin.ModelAdmin):
    list_display = ['candidate_name', 'candidate_class', 'candidate_school', 'exam', 'status', 'score']
    list_filter = ['status']


admin.site.register(ExamBody)
admin.site.register(Category)
admin.site.register(Subject)
admin.site.register(SubjectWeight)
admin.site.register(LockedQuestion)
admin.site.register(CandidateAnswer)
