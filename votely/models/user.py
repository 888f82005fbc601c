import uuid
from datetime import datetime
from sqlalchemy import Uuid
from ..extensions import db
from ..utils.security import hash_password, verify_password

class User(db.Model):
    __tablename__ = "users"

    id = db.Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = db.Column(db.String(255), nullable=False, unique=True, index=True)
    username = db.Column(db.String(30), nullable=False, unique=True, index=True)
    phone_number = db.Column(db.String(30), nullable=True)
    password_hash = db.Column(db.String(255), nullable=False)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    def set_password(self, raw_password: str) -> None:
        self.password_hash = hash_password(raw_password)

    def check_password(self, raw_password: str) -> bool:
        return verify_password(raw_password, self.password_hash)
