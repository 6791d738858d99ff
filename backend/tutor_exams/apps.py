from django.apps import AppConfig


class TutorExamsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'tutor_exams'

    def ready(self):
        from . import signals  # noqa: F401
