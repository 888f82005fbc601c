import uuid
from datetime import datetime
from sqlalchemy import Uuid
from ..extensions import db

class Vote(db.Model):
    __tablename__ = "votes"

    id = db.Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    poll_id = db.Column(Uuid(as_uuid=True), db.ForeignKey("polls.id", ondelete="CASCADE"), nullable=False, index=True)
    option_index = db.Column(db.Integer, nullable=False)
    voted_by = db.Column(Uuid(as_uuid=True), db.ForeignKey("users.id"), nullable=False, index=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        # One vote per user per poll; the admission service relies on this
        # constraint when two submissions race.
        db.UniqueConstraint("poll_id", "voted_by", name="uq_votes_poll_voter"),
    )
