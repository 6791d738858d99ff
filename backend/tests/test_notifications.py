from unittest.mock import patch, AsyncMock

from django.test import TestCase, override_settings

from tutor_exams.notifications import notify_tutor_access_request, notify_results_published
from tutor_exams.tasks import send_tutor_access_notification, send_results_published_notification
from tests.helpers import make_tutor, make_pool, make_exam


class TestNotifications(TestCase):
    def setUp(self):
        self.tutor = make_tutor()
        self.profile = self.tutor.tutor_profile

    def test_skipped_without_token(self):
        self.assertFalse(notify_tutor_access_request(self.profile))

    @override_settings(TELEGRAM_BOT_TOKEN='test-token', TELEGRAM_CHANNEL_ID='@admins')
    def test_access_request_message(self):
        with patch('telegram.Bot') as mock_bot:
            mock_bot.return_value.send_message = AsyncMock()
            self.assertTrue(notify_tutor_access_request(self.profile))

        kwargs = mock_bot.return_value.send_message.call_args.kwargs
        self.assertEqual(kwargs['chat_id'], '@admins')
        self.assertIn('tutor', kwargs['text'])
        self.assertEqual(kwargs['parse_mode'], 'HTML')

    @override_settings(TELEGRAM_BOT_TOKEN='test-token', TELEGRAM_CHANNEL_ID='@admins')
    def test_results_message_escapes_title(self):
        body, category, subjects = make_pool()
        exam = make_exam(self.tutor, body, category, [(subjects['Mathematics'], 1)], title='<b>SS2</b> & co')
        summary = {'candidates': 2, 'mean_score': 0.5}
        with patch('telegram.Bot') as mock_bot:
            mock_bot.return_value.send_message = AsyncMock()
            notify_results_published(exam, summary)

        text = mock_bot.return_value.send_message.call_args.kwargs['text']
        self.assertIn('&lt;b&gt;SS2&lt;/b&gt; &amp; co', text)
        self.assertIn('Candidates: 2', text)


class TestNotificationTasks(TestCase):
    @patch('tutor_exams.notifications.notify_tutor_access_request')
    def test_access_task_loads_profile(self, mock_notify):
        profile = make_tutor().tutor_profile
        send_tutor_access_notification(profile.id)
        self.assertEqual(mock_notify.call_args[0][0], profile)

    @patch('tutor_exams.notifications.notify_tutor_access_request')
    def test_access_task_missing_profile(self, mock_notify):
        send_tutor_access_notification(999999)
        mock_notify.assert_not_called()

    @patch('tutor_exams.notifications.notify_results_published')
    def test_results_task_passes_summary(self, mock_notify):
        tutor = make_tutor()
        body, category, subjects = make_pool()
        exam = make_exam(tutor, body, category, [(subjects['Mathematics'], 1)])
        send_results_published_notification(str(exam.id))
        sent_exam, summary = mock_notify.call_args[0]
        self.assertEqual(sent_exam, exam)
        self.assertEqual(summary['candidates'], 0)
