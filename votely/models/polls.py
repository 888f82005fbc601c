import uuid
from datetime import datetime
from sqlalchemy import Uuid
from ..extensions import db

class Poll(db.Model):
    __tablename__ = "polls"

    QUESTION_MIN_LENGTH = 5
    QUESTION_MAX_LENGTH = 200
    MIN_OPTIONS = 2
    MAX_OPTIONS = 10
    OPTION_MAX_LENGTH = 100

    id = db.Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    created_by = db.Column(Uuid(as_uuid=True), db.ForeignKey("users.id"), nullable=False, index=True)
    question = db.Column(db.String(QUESTION_MAX_LENGTH), nullable=False)

    # Ordered option texts. Votes point at positions in this list, so edits
    # replace the whole list instead of patching entries.
    options = db.Column(db.JSON, nullable=False)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    # relationship
    votes = db.relationship(
        "Vote",
        backref="poll",
        lazy=True,
        cascade="all, delete-orphan"
    )

    def is_owned_by(self, user_id) -> bool:
        return user_id is not None and str(self.created_by) == str(user_id)

    def has_option(self, option_index: int) -> bool:
        return 0 <= option_index < len(self.options or [])
