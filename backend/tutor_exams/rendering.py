"""PDF result artifacts for a published exam.

Artifacts are written to Django's default storage; the returned reference is
the storage key.
"""
from io import BytesIO

from django.conf import settings
from django.core.files.base import ContentFile
from django.core.files.storage import default_storage
from django.utils import timezone
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from .statistics import summarize

PAGE_W, PAGE_H = A4
MARGIN = 50
ROW_HEIGHT = 18

# Master sheet columns: (label, x offset, max characters)
COLUMNS = [
    ('Rank', MARGIN, 5),
    ('Candidate Name', MARGIN + 40, 24),
    ('Class', MARGIN + 200, 10),
    ('School', MARGIN + 270, 24),
    ('Score', MARGIN + 420, 9),
    ('%', MARGIN + 475, 5),
]


def _clip(text, limit):
    text = str(text)
    return text if len(text) <= limit else text[:limit - 3] + '...'


class ResultRenderer:
    """Renders the ranked master sheet and the individual result slips."""

    def __init__(self, storage=None, prefix=None, brand=None):
        self.storage = storage or default_storage
        self.prefix = prefix if prefix is not None else settings.TUTOR_EXAMS['RESULTS_STORAGE_PREFIX']
        self.brand = brand or settings.TUTOR_EXAMS['BRAND_NAME']

    def _save(self, name, buf):
        key = f'{self.prefix}{name}'
        if self.storage.exists(key):
            self.storage.delete(key)
        return self.storage.save(key, ContentFile(buf.getvalue()))

    def _table_header(self, c, y):
        c.setFont('Helvetica-Bold', 11)
        for label, x, _ in COLUMNS:
            c.drawString(x, y, label)
        c.setLineWidth(0.5)
        c.line(MARGIN, y - 5, PAGE_W - MARGIN, y - 5)
        c.setFont('Helvetica', 10)
        return y - ROW_HEIGHT

    def render_master_sheet(self, exam, ranked):
        buf = BytesIO()
        c = canvas.Canvas(buf, pagesize=A4)
        c.setTitle(f'{exam.title} - Results')

        y = PAGE_H - MARGIN
        c.setFont('Helvetica-Bold', 18)
        c.drawCentredString(PAGE_W / 2, y, f'{self.brand} - Exam Results')
        y -= 24
        c.setFont('Helvetica-Bold', 14)
        c.drawCentredString(PAGE_W / 2, y, _clip(exam.title, 70))
        y -= 18
        c.setFont('Helvetica', 10)
        c.drawCentredString(PAGE_W / 2, y, f'Generated on: {timezone.now():%d.%m.%Y %H:%M} UTC')
        y -= 30

        stats = summarize([item['session'] for item in ranked], exam.total_questions)
        c.setFont('Helvetica-Bold', 12)
        c.drawString(MARGIN, y, 'Summary Statistics')
        y -= 16
        c.setFont('Helvetica', 10)
        for line in (
            f'Total Questions: {exam.total_questions}',
            f'Total Candidates: {stats["candidates"]}',
            f'Mean Score: {stats["mean_score"]} ({stats["mean_percentage"]}%)',
            f'Highest / Lowest: {stats["highest_score"]} / {stats["lowest_score"]}',
        ):
            c.drawString(MARGIN, y, line)
            y -= 14
        y -= 16

        y = self._table_header(c, y)
        for item in ranked:
            if y < MARGIN + ROW_HEIGHT:
                c.showPage()
                y = self._table_header(c, PAGE_H - MARGIN)
            session = item['session']
            values = [
                item['rank'],
                session.candidate_name,
                session.candidate_class,
                session.candidate_school,
                f'{session.score} / {exam.total_questions}',
                f'{item["percentage"]}%',
            ]
            for (_, x, limit), value in zip(COLUMNS, values):
                c.drawString(x, y, _clip(value, limit))
            y -= ROW_HEIGHT

        c.showPage()
        c.save()
        return self._save(f'results_{exam.id}_master.pdf', buf)

    def render_individual_slips(self, exam, ranked):
        buf = BytesIO()
        c = canvas.Canvas(buf, pagesize=A4)
        c.setTitle(f'{exam.title} - Result Slips')
        candidates = len(ranked)

        for item in ranked:
            session = item['session']
            y = PAGE_H - MARGIN
            c.setFont('Helvetica-Bold', 18)
            c.drawCentredString(PAGE_W / 2, y, self.brand)
            y -= 22
            c.setFont('Helvetica', 14)
            c.drawCentredString(PAGE_W / 2, y, 'Individual Result Slip')
            y -= 36

            c.setFont('Helvetica-Bold', 12)
            c.drawString(MARGIN, y, 'Exam Title:')
            c.setFont('Helvetica', 12)
            c.drawString(MARGIN + 80, y, _clip(exam.title, 60))
            y -= 30

            c.setFont('Helvetica-Bold', 12)
            c.drawString(MARGIN, y, 'Candidate Information')
            y -= 18
            c.setFont('Helvetica', 12)
            for line in (
                f'Name: {session.candidate_name}',
                f'Class: {session.candidate_class}',
                f'School: {session.candidate_school}',
            ):
                c.drawString(MARGIN, y, _clip(line, 80))
                y -= 16
            y -= 16

            c.setFont('Helvetica-Bold', 14)
            c.drawString(MARGIN, y, 'Performance Summary')
            y -= 20
            c.setFont('Helvetica', 12)
            c.drawString(MARGIN, y, f'Total Questions: {exam.total_questions}')
            y -= 16
            c.drawString(MARGIN, y, f'Correct Answers: {session.score}')
            y -= 16
            c.drawString(MARGIN, y, f'Position: {item["rank"]} of {candidates}')
            y -= 28
            c.setFont('Helvetica-Bold', 16)
            c.drawRightString(PAGE_W - MARGIN, y, f'FINAL SCORE: {item["percentage"]}%')

            c.setFont('Helvetica-Oblique', 9)
            c.drawCentredString(PAGE_W / 2, MARGIN, 'This is a system-generated result slip.')
            c.showPage()

        c.save()
        return self._save(f'results_{exam.id}_individual.pdf', buf)
