"""
Vote admission.

Applies a user's choice to a poll so that each ``(poll, user)`` pair has at
most one vote row. The look-up below is only a fast path: the
``uq_votes_poll_voter`` constraint decides, and an insert that collides with
it is turned into an update of the row that won.
"""
from dataclasses import dataclass
from datetime import datetime

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..exceptions import InvalidOptionIndex, PollNotFound, StorageError
from ..extensions import db
from ..models.polls import Poll
from ..models.vote import Vote
from ..utils.audit import audit_log

STATUS_CREATED = "created"
STATUS_UPDATED = "updated"


@dataclass(frozen=True)
class VoteResult:
    vote: Vote
    status: str

    @property
    def created(self) -> bool:
        return self.status == STATUS_CREATED


def _find_vote(poll_id, user_id):
    return Vote.query.filter_by(poll_id=poll_id, voted_by=user_id).first()


def _load_poll(poll_id) -> Poll:
    poll = db.session.get(Poll, poll_id)
    if poll is None:
        raise PollNotFound()
    return poll


def _apply_update(vote: Vote, option_index: int, user_id) -> VoteResult:
    previous = vote.option_index
    vote.option_index = option_index
    vote.updated_at = datetime.utcnow()

    audit_log(
        action="VOTE_UPDATED",
        actor_id=user_id,
        entity_type="VOTE",
        entity_id=vote.id,
        details={"poll_id": str(vote.poll_id), "from_option": previous, "to_option": option_index},
    )
    db.session.commit()
    return VoteResult(vote=vote, status=STATUS_UPDATED)


def submit_vote(poll_id, option_index: int, user_id) -> VoteResult:
    """
    Record ``user_id``'s vote for ``option_index`` on ``poll_id``.

    ``poll_id`` must already be a parsed UUID. The option range is checked
    against the poll's current options, never against client data.
    """
    try:
        poll = _load_poll(poll_id)
        if not poll.has_option(option_index):
            raise InvalidOptionIndex()

        existing = _find_vote(poll_id, user_id)
        if existing is not None:
            return _apply_update(existing, option_index, user_id)

        try:
            vote = Vote(poll_id=poll_id, option_index=option_index, voted_by=user_id)
            db.session.add(vote)
            db.session.flush()  # surfaces uq_votes_poll_voter before audit

            audit_log(
                action="VOTE_CREATED",
                actor_id=user_id,
                entity_type="VOTE",
                entity_id=vote.id,
                details={"poll_id": str(poll_id), "option_index": option_index},
            )
            db.session.commit()
            return VoteResult(vote=vote, status=STATUS_CREATED)

        except IntegrityError:
            # A concurrent submission for the same pair committed first.
            db.session.rollback()
            current_app.logger.info(
                "Vote insert collided, updating instead poll_id=%s user_id=%s", poll_id, user_id
            )

        winner = _find_vote(poll_id, user_id)
        if winner is None:
            # The collision was not ours to resolve; maybe the poll went away.
            _load_poll(poll_id)
            raise StorageError("Failed to record vote")
        return _apply_update(winner, option_index, user_id)

    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("DB error while submitting vote poll_id=%s", poll_id)
        raise StorageError("Failed to record vote")


def get_vote_status(poll_id, user_id):
    """The caller's current vote on the poll, or None if they have not voted."""
    try:
        _load_poll(poll_id)
        return _find_vote(poll_id, user_id)
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("DB error while checking vote status poll_id=%s", poll_id)
        raise StorageError("Failed to check vote status")
