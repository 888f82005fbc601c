from datetime import datetime
from sqlalchemy import Uuid
from ..extensions import db

class TokenBlocklist(db.Model):
    __tablename__ = "token_blocklist"

    id = db.Column(db.Integer, primary_key=True)
    jti = db.Column(db.String(64), nullable=False, unique=True, index=True)
    token_type = db.Column(db.String(10), nullable=False, default="access")
    user_id = db.Column(Uuid(as_uuid=True), nullable=True, index=True)
    revoked_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    @staticmethod
    def is_blocklisted(jti: str) -> bool:
        return db.session.query(TokenBlocklist.id).filter_by(jti=jti).scalar() is not None

    @classmethod
    def revoke(cls, jti: str, token_type: str, user_id=None) -> "TokenBlocklist":
        """Stage a revocation; the caller commits."""
        entry = cls(jti=jti, token_type=token_type, user_id=user_id)
        db.session.add(entry)
        return entry
