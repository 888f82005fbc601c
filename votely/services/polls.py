"""
Poll storage operations: retrieval for aggregation, owner-only mutations
and the explore/manage listings.
"""
from flask import current_app
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from ..exceptions import PollForbidden, PollNotFound, StorageError, ValidationFailed
from ..extensions import db
from ..models.polls import Poll
from ..models.user import User
from ..models.vote import Vote
from ..utils.audit import audit_log
from .poll_input import validate_poll_input
from .stats import compute_poll_stats


def get_poll(poll_id) -> Poll:
    try:
        poll = db.session.get(Poll, poll_id)
    except SQLAlchemyError:
        current_app.logger.exception("DB error fetching poll poll_id=%s", poll_id)
        raise StorageError("Failed to fetch poll")
    if poll is None:
        raise PollNotFound()
    return poll


def get_poll_with_votes(poll_id):
    """
    Return ``(poll, votes)`` with every vote row for the poll, unfiltered.
    The option list used for aggregation comes from this same poll row.
    """
    poll = get_poll(poll_id)
    try:
        votes = Vote.query.filter_by(poll_id=poll.id).all()
    except SQLAlchemyError:
        current_app.logger.exception("DB error fetching votes poll_id=%s", poll_id)
        raise StorageError("Failed to fetch votes")
    return poll, votes


def get_poll_stats(poll_id):
    poll, votes = get_poll_with_votes(poll_id)
    return poll, compute_poll_stats(poll.options, votes)


def _owned_poll(poll_id, user_id) -> Poll:
    poll = get_poll(poll_id)
    if not poll.is_owned_by(user_id):
        current_app.logger.warning("Denied poll mutation poll_id=%s user_id=%s", poll_id, user_id)
        raise PollForbidden()
    return poll


def create_poll(user_id, question, options) -> Poll:
    data = validate_poll_input(question, options)

    poll = Poll(created_by=user_id, question=data.question, options=list(data.options))
    try:
        db.session.add(poll)
        db.session.flush()

        audit_log(
            action="POLL_CREATED",
            actor_id=user_id,
            entity_type="POLL",
            entity_id=poll.id,
            details={"question": poll.question, "option_count": len(poll.options)},
        )

        db.session.commit()
        return poll

    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("DB error creating poll")
        raise StorageError("Failed to create poll")


def update_poll(poll_id, user_id, question, options) -> Poll:
    """
    Replace question and option list. Existing votes are kept; any that now
    point past the end of the list are ignored by the aggregator.
    """
    poll = _owned_poll(poll_id, user_id)
    data = validate_poll_input(question, options)

    try:
        poll.question = data.question
        poll.options = list(data.options)

        audit_log(
            action="POLL_UPDATED",
            actor_id=user_id,
            entity_type="POLL",
            entity_id=poll.id,
            details={"question": poll.question, "option_count": len(poll.options)},
        )

        db.session.commit()
        return poll

    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("DB error updating poll poll_id=%s", poll_id)
        raise StorageError("Failed to update poll")


def delete_poll(poll_id, user_id) -> None:
    """Votes and poll go in one transaction; a failure leaves both in place."""
    poll = _owned_poll(poll_id, user_id)

    try:
        deleted_votes = Vote.query.filter_by(poll_id=poll.id).delete(synchronize_session="fetch")

        audit_log(
            action="POLL_DELETED",
            actor_id=user_id,
            entity_type="POLL",
            entity_id=poll.id,
            details={"question": poll.question, "deleted_votes": deleted_votes},
        )

        db.session.delete(poll)
        db.session.commit()

    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("DB error deleting poll poll_id=%s", poll_id)
        raise StorageError("Failed to delete poll")


def list_polls(page: int = 1, limit: int | None = None):
    """
    Newest-first page of polls for the explore view.
    Returns ``(rows, total)`` where each row is ``(poll, vote_count, username)``.
    """
    max_limit = current_app.config["POLLS_MAX_PAGE_SIZE"]
    if limit is None:
        limit = current_app.config["POLLS_DEFAULT_PAGE_SIZE"]
    if page < 1:
        raise ValidationFailed("Page must be 1 or greater", details={"field": "page"})
    if not 1 <= limit <= max_limit:
        raise ValidationFailed(f"Limit must be between 1 and {max_limit}", details={"field": "limit"})

    vote_counts = (
        db.session.query(Vote.poll_id.label("poll_id"), func.count(Vote.id).label("votes"))
        .group_by(Vote.poll_id)
        .subquery()
    )

    try:
        rows = (
            db.session.query(
                Poll,
                func.coalesce(vote_counts.c.votes, 0),
                User.username,
            )
            .outerjoin(vote_counts, vote_counts.c.poll_id == Poll.id)
            .outerjoin(User, User.id == Poll.created_by)
            .order_by(Poll.created_at.desc(), Poll.id)
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        total = db.session.query(func.count(Poll.id)).scalar() or 0
    except SQLAlchemyError:
        current_app.logger.exception("DB error listing polls")
        raise StorageError("Could not fetch polls")

    return [(poll, int(count), username) for poll, count, username in rows], total


def list_user_polls_with_stats(user_id):
    """The caller's polls, newest first, each paired with its PollStats."""
    try:
        polls = (
            Poll.query
            .filter_by(created_by=user_id)
            .order_by(Poll.created_at.desc())
            .all()
        )
        poll_ids = [p.id for p in polls]
        votes = Vote.query.filter(Vote.poll_id.in_(poll_ids)).all() if poll_ids else []
    except SQLAlchemyError:
        current_app.logger.exception("DB error listing polls for user_id=%s", user_id)
        raise StorageError("Failed to retrieve polls")

    votes_by_poll = {}
    for vote in votes:
        votes_by_poll.setdefault(vote.poll_id, []).append(vote)

    return [(poll, compute_poll_stats(poll.options, votes_by_poll.get(poll.id, []))) for poll in polls]
