import asyncio
import html
import logging

from django.conf import settings

logger = logging.getLogger(__name__)


def _send_to_channel(text):
    bot_token = getattr(settings, 'TELEGRAM_BOT_TOKEN', '')
    channel_id = getattr(settings, 'TELEGRAM_CHANNEL_ID', None)

    if not bot_token or not channel_id:
        logger.warning("Telegram bot token or channel not configured, skipping notification")
        return False

    from telegram import Bot

    async def _send():
        bot = Bot(token=bot_token)
        await bot.send_message(chat_id=channel_id, text=text, parse_mode='HTML')

    loop = asyncio.new_event_loop()
    try:
        loop.run_until_complete(_send())
    finally:
        loop.close()
    logger.info("Sent notification to channel %s", channel_id)
    return True


def notify_tutor_access_request(profile):
    """Tell the admin channel that a user asked for tutor access."""
    user = profile.user
    text = (
        "\U0001f464 <b>New tutor access request</b>\n\n"
        f"User: <b>{html.escape(user.get_full_name() or user.username)}</b>\n"
        f"Email: {html.escape(user.email or '-')}\n"
        f"Requested: {profile.created_at.strftime('%d.%m.%Y %H:%M')}\n\n"
        "Approve or reject the profile in the admin panel."
    )
    return _send_to_channel(text)


def notify_results_published(exam, summary):
    """Tell the admin channel that a tutor closed an exam and published results."""
    text = (
        "\U0001f4ca <b>Results published</b>\n\n"
        f"<b>{html.escape(exam.title)}</b>\n"
        f"Tutor: {html.escape(exam.tutor.username)}\n"
        f"Candidates: {summary['candidates']}\n"
        f"Mean score: {summary['mean_score']} / {exam.total_questions}"
    )
    return _send_to_channel(text)
