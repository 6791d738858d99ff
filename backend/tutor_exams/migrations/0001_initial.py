import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='ExamBody',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255, unique=True)),
            ],
        ),
        migrations.CreateModel(
            name='Category',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('exam_body', models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name='categories', to='tutor_exams.exambody',
                )),
            ],
            options={
                'verbose_name_plural': 'categories',
            },
        ),
        migrations.CreateModel(
            name='Subject',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('category', models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name='subjects', to='tutor_exams.category',
                )),
            ],
        ),
        migrations.CreateModel(
            name='Question',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('text', models.TextField()),
                ('status', models.CharField(
                    choices=[('draft', 'Draft'), ('live', 'Live'), ('archived', 'Archived')],
                    db_index=True, default='draft', max_length=20,
                )),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('subject', models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name='questions', to='tutor_exams.subject',
                )),
            ],
            options={
                'indexes': [
                    models.Index(fields=['subject', 'status'], name='idx_question_subject_status'),
                ],
            },
        ),
        migrations.CreateModel(
            name='QuestionOption',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('text', models.TextField()),
                ('order', models.PositiveSmallIntegerField(default=0)),
                ('is_correct', models.BooleanField(default=False)),
                ('question', models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name='options', to='tutor_exams.question',
                )),
            ],
            options={
                'ordering': ['order', 'id'],
            },
        ),
        migrations.CreateModel(
            name='TutorProfile',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('status', models.CharField(
                    choices=[('pending', 'Pending'), ('approved', 'Approved'), ('rejected', 'Rejected')],
                    default='pending', max_length=20,
                )),
                ('student_quota', models.PositiveIntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('user', models.OneToOneField(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name='tutor_profile', to=settings.AUTH_USER_MODEL,
                )),
            ],
        ),
        migrations.CreateModel(
            name='TutorExam',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('title', models.CharField(max_length=255)),
                ('total_questions', models.PositiveIntegerField()),
                ('time_limit_minutes', models.PositiveIntegerField(default=60)),
                ('expires_at', models.DateTimeField()),
                ('max_candidates', models.PositiveIntegerField()),
                ('status', models.CharField(
                    choices=[('active', 'Active'), ('closed', 'Closed')],
                    db_index=True, default='active', max_length=20,
                )),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('published_at', models.DateTimeField(blank=True, null=True)),
                ('master_sheet_ref', models.CharField(blank=True, default='', max_length=500)),
                ('individual_slips_ref', models.CharField(blank=True, default='', max_length=500)),
                ('category', models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name='+', to='tutor_exams.category',
                )),
                ('exam_body', models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name='+', to='tutor_exams.exambody',
                )),
                ('tutor', models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name='tutor_exams', to=settings.AUTH_USER_MODEL,
                )),
            ],
            options={
                'indexes': [
                    models.Index(fields=['tutor', '-created_at'], name='idx_tutor_exam_created'),
                ],
            },
        ),
        migrations.CreateModel(
            name='SubjectWeight',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('question_count', models.PositiveIntegerField()),
                ('exam', models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name='subject_weights', to='tutor_exams.tutorexam',
                )),
                ('subject', models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name='+', to='tutor_exams.subject',
                )),
            ],
            options={
                'unique_together': {('exam', 'subject')},
            },
        ),
        migrations.CreateModel(
            name='LockedQuestion',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('correct_option', models.ForeignKey(
                    blank=True, null=True,
                    help_text='Option marked correct when the question was locked',
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name='+', to='tutor_exams.questionoption',
                )),
                ('exam', models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name='locked_questions', to='tutor_exams.tutorexam',
                )),
                ('question', models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name='+', to='tutor_exams.question',
                )),
                ('subject', models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name='+', to='tutor_exams.subject',
                )),
            ],
            options={
                'unique_together': {('exam', 'question')},
            },
        ),
        migrations.CreateModel(
            name='CandidateSession',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('candidate_name', models.CharField(max_length=255)),
                ('candidate_class', models.CharField(max_length=100)),
                ('candidate_school', models.CharField(max_length=255)),
                ('status', models.CharField(
                    choices=[('in_progress', 'In progress'), ('submitted', 'Submitted')],
                    db_index=True, default='in_progress', max_length=20,
                )),
                ('score', models.IntegerField(blank=True, null=True)),
                ('started_at', models.DateTimeField(auto_now_add=True)),
                ('submitted_at', models.DateTimeField(blank=True, null=True)),
                ('exam', models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name='sessions', to='tutor_exams.tutorexam',
                )),
            ],
            options={
                'indexes': [
                    models.Index(fields=['exam', 'status'], name='idx_candidate_exam_status'),
                ],
                'constraints': [
                    models.UniqueConstraint(
                        fields=('exam', 'candidate_name', 'candidate_class', 'candidate_school'),
                        name='uniq_candidate_per_exam',
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name='CandidateAnswer',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('is_correct', models.BooleanField(default=False)),
                ('question', models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name='+', to='tutor_exams.question',
                )),
                ('selected_option', models.ForeignKey(
                    blank=True, null=True,
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name='+', to='tutor_exams.questionoption',
                )),
                ('session', models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name='answers', to='tutor_exams.candidatesession',
                )),
            ],
            options={
                'unique_together': {('session', 'question')},
            },
        ),
    ]
