import numpy as np

from .models import CandidateSession


def _submitted(sessions):
    return [s for s in sessions if s.status == CandidateSession.Status.SUBMITTED]


def percentage(score, total_questions):
    if not total_questions:
        return 0
    return round((score or 0) / total_questions * 100)


def rank_sessions(sessions, total_questions):
    """Rank submitted sessions by score, best first.

    Uses competition ranking (1, 2, 2, 4): tied scores share a rank. Within a
    tie, earlier submissions are listed first. In-progress sessions are
    ignored. Returns a list of dicts with ``session``, ``rank`` and
    ``percentage``.
    """
    submitted = sorted(
        _submitted(sessions),
        key=lambda s: (-(s.score or 0), s.submitted_at, s.candidate_name),
    )
    if not submitted:
        return []

    scores = np.array([s.score or 0 for s in submitted])
    ranks = 1 + (scores[None, :] > scores[:, None]).sum(axis=1)

    return [
        {
            'session': session,
            'rank': int(rank),
            'percentage': percentage(session.score, total_questions),
        }
        for session, rank in zip(submitted, ranks)
    ]


def summarize(sessions, total_questions):
    """Score distribution of the submitted sessions."""
    scores = np.array([s.score or 0 for s in _submitted(sessions)], dtype=float)
    if scores.size == 0:
        return {
            'candidates': 0,
            'mean_score': 0.0,
            'median_score': 0.0,
            'highest_score': 0,
            'lowest_score': 0,
            'std_dev': 0.0,
            'mean_percentage': 0.0,
        }

    mean = float(scores.mean())
    return {
        'candidates': int(scores.size),
        'mean_score': round(mean, 2),
        'median_score': round(float(np.median(scores)), 2),
        'highest_score': int(scores.max()),
        'lowest_score': int(scores.min()),
        'std_dev': round(float(scores.std()), 2),
        'mean_percentage': round(mean / total_questions * 100, 1) if total_questions else 0.0,
    }


def session_counts(sessions):
    """Totals for the tutor's stats view; average is over submitted sessions only."""
    submitted = _submitted(sessions)
    in_progress = sum(1 for s in sessions if s.status == CandidateSession.Status.IN_PROGRESS)
    average = float(np.mean([s.score or 0 for s in submitted])) if submitted else 0.0
    return {
        'total': len(sessions),
        'submitted': len(submitted),
        'in_progress': in_progress,
        'average_score': round(average, 2),
    }
