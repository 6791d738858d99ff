from django.contrib.auth.models import User
from django.core.management.base import BaseCommand
from django.db import transaction

from tutor_exams.models import ExamBody, Category, Subject, Question, QuestionOption, TutorProfile


class Command(BaseCommand):
    help = 'Seed a development question pool and, optionally, an approved tutor'

    def add_arguments(self, parser):
        parser.add_argument('--exam-body', type=str, default='WAEC', help='Exam body name (default: WAEC)')
        parser.add_argument('--category', type=str, default='Science', help='Category name (default: Science)')
        parser.add_argument(
            '--subjects', type=str, default='Mathematics,English,Physics',
            help='Comma-separated subject names',
        )
        parser.add_argument('--per-subject', type=int, default=20, help='Live questions per subject (default: 20)')
        parser.add_argument('--options', type=int, default=4, help='Options per question (default: 4)')
        parser.add_argument('--tutor', type=str, help='Username to create as an approved tutor')
        parser.add_argument('--password', type=str, default='tutor12345', help='Password for --tutor')
        parser.add_argument('--quota', type=int, default=50, help='Student quota for --tutor (default: 50)')

    def handle(self, *args, **options):
        if options['per_subject'] < 1 or options['options'] < 2:
            self.stderr.write(self.style.ERROR('Need at least 1 question per subject and 2 options per question.'))
            return

        names = [n.strip() for n in options['subjects'].split(',') if n.strip()]
        if not names:
            self.stderr.write(self.style.ERROR('No subjects given.'))
            return

        with transaction.atomic():
            body, _ = ExamBody.objects.get_or_create(name=options['exam_body'])
            category, _ = Category.objects.get_or_create(exam_body=body, name=options['category'])

            for name in names:
                subject, _ = Subject.objects.get_or_create(category=category, name=name)
                existing = subject.questions.filter(status=Question.Status.LIVE).count()
                missing = max(options['per_subject'] - existing, 0)
                for i in range(missing):
                    question = Question.objects.create(
                        subject=subject,
                        text=f'{name} sample question {existing + i + 1}',
                        status=Question.Status.LIVE,
                    )
                    QuestionOption.objects.bulk_create([
                        QuestionOption(
                            question=question,
                            text=f'Option {chr(ord("A") + k)}',
                            order=k,
                            is_correct=(k == 0),
                        )
                        for k in range(options['options'])
                    ])
                self.stdout.write(f'  {subject}: {existing + missing} live questions (+{missing})')

            if options.get('tutor'):
                self._ensure_tutor(options['tutor'], options['password'], options['quota'])

        self.stdout.write(self.style.SUCCESS(f'Pool ready: {body.name} / {category.name} (category id {category.id})'))

    def _ensure_tutor(self, username, password, quota):
        user, created = User.objects.get_or_create(username=username)
        if created:
            user.set_password(password)
            user.save()

        profile, _ = TutorProfile.objects.get_or_create(user=user)
        profile.status = TutorProfile.Status.APPROVED
        profile.student_quota = quota
        profile.save()

        if created:
            self.stdout.write(self.style.SUCCESS(f'Created approved tutor: {username}'))
        else:
            self.stdout.write(self.style.WARNING(f'Approved existing user as tutor: {username}'))
