from flask import Blueprint, request, current_app
from flasgger import swag_from
from flask_jwt_extended import (
    create_access_token,
    create_refresh_token,
    jwt_required,
    get_jwt,
)
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ...exceptions import AuthenticationRequired, Conflict, StorageError, UserNotFound
from ...extensions import db
from ...models.user import User
from ...models.token_blocklist import TokenBlocklist
from ...schemas.auth import RegisterSchema, LoginSchema
from ...schemas.user import UserSchema
from ...utils.audit import audit_log
from ...utils.security import verify_password
from ...utils.session import current_user_id
from ...utils.validation import load_or_raise, request_payload

auth_bp = Blueprint("auth", __name__)

register_schema = RegisterSchema()
login_schema = LoginSchema()
user_schema = UserSchema()


def _revoke_current_token(action: str) -> None:
    claims = get_jwt()
    jti = claims.get("jti")
    user_id = current_user_id()

    try:
        TokenBlocklist.revoke(jti, claims.get("type", "access"), user_id=user_id)
        audit_log(
            action=action,
            actor_id=user_id,
            entity_type="AUTH",
            entity_id=user_id,
            details={"jti": jti},
        )
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("DB error during logout")
        raise StorageError("Logout failed")


@auth_bp.post("/register")
@swag_from({
    "tags": ["Auth"],
    "summary": "Register a user",
    "parameters": [{
        "in": "body",
        "name": "body",
        "required": True,
        "schema": {
            "type": "object",
            "properties": {
                "email": {"type": "string", "example": "ada@example.com"},
                "password": {"type": "string", "example": "StrongPass123"},
                "username": {"type": "string", "example": "ada"},
                "phone_number": {"type": "string", "example": "+15550100"},
            },
            "required": ["email", "password", "username"]
        }
    }],
    "responses": {
        201: {"description": "User created"},
        400: {"description": "Validation error"},
        409: {"description": "Email or username already exists"}
    }
})
def register():
    payload = load_or_raise(register_schema, request_payload(request))

    email = payload["email"].lower().strip()
    username = payload["username"].strip()

    clash = User.query.filter(or_(User.email == email, User.username == username)).first()
    if clash:
        field = "email" if clash.email == email else "username"
        raise Conflict(f"{field.capitalize()} already registered", details={"field": field})

    user = User(email=email, username=username, phone_number=payload.get("phone_number") or None)
    user.set_password(payload["password"])

    try:
        db.session.add(user)
        db.session.flush()  # ensure user.id exists for audit

        audit_log(
            action="USER_REGISTERED",
            actor_id=user.id,
            entity_type="AUTH",
            entity_id=user.id,
            details={"email": user.email, "username": user.username},
        )

        db.session.commit()
        return {"message": "User registered successfully", "user": user_schema.dump(user)}, 201

    except IntegrityError:
        # lost a race with another registration for the same email/username
        db.session.rollback()
        raise Conflict("Email or username already registered")
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("DB error during register")
        raise StorageError("Failed to register user")


@auth_bp.post("/login")
@swag_from({
    "tags": ["Auth"],
    "summary": "Login with email and password",
    "description": "Validates email/password and returns access/refresh tokens on successful login.",
    "responses": {
        200: {"description": "Login successful, tokens returned"},
        400: {"description": "Validation error"},
        401: {"description": "Invalid credentials"},
    }
})
def login():
    payload = load_or_raise(login_schema, request_payload(request))

    email = payload["email"].lower().strip()

    try:
        user = User.query.filter_by(email=email).first()

        # Invalid credentials (don't leak which part failed)
        password_ok = user.check_password(payload["password"]) if user else verify_password(payload["password"], None)
        if not password_ok:
            audit_log(
                action="LOGIN_FAILED",
                actor_id=user.id if user else None,
                entity_type="AUTH",
                details={"email": email},
            )
            db.session.commit()
            raise AuthenticationRequired("Invalid email or password")

        access_token = create_access_token(identity=str(user.id))
        refresh_token = create_refresh_token(identity=str(user.id))

        audit_log(
            action="LOGIN_SUCCESS",
            actor_id=user.id,
            entity_type="AUTH",
            entity_id=user.id,
        )
        db.session.commit()

    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("DB error during login")
        raise StorageError("Authentication service error. Please try again.")

    return {
        "message": "Login successful",
        "access_token": access_token,
        "refresh_token": refresh_token,
        "token_type": "bearer",
        "user": user_schema.dump(user),
    }, 200


@auth_bp.post("/refresh")
@jwt_required(refresh=True)
@swag_from({
    "tags": ["Auth"],
    "security": [{"BearerAuth": []}],
    "summary": "Refresh access token (requires refresh token)",
    "responses": {
        200: {"description": "New access token issued"},
        401: {"description": "Unauthorized"},
    },
})
def refresh():
    user_id = current_user_id()
    user = db.session.get(User, user_id)
    if not user:
        raise AuthenticationRequired("User not found")

    return {"access_token": create_access_token(identity=str(user.id))}, 200


@auth_bp.get("/me")
@jwt_required()
@swag_from({
    "tags": ["Auth"],
    "security": [{"BearerAuth": []}],
    "summary": "Get current user profile",
    "responses": {
        200: {"description": "User profile"},
        401: {"description": "Unauthorized"},
        404: {"description": "User not found"},
    },
})
def me():
    user = db.session.get(User, current_user_id())
    if not user:
        raise UserNotFound()

    return {"user": user_schema.dump(user)}, 200


@auth_bp.post("/logout")
@jwt_required()
@swag_from({
    "tags": ["Auth"],
    "security": [{"BearerAuth": []}],
    "summary": "Logout (revoke access token)",
    "responses": {
        200: {"description": "Logged out"},
        401: {"description": "Unauthorized"},
    },
})
def logout():
    _revoke_current_token("LOGOUT")
    return {"message": "Logged out successfully"}, 200


@auth_bp.post("/logout/refresh")
@jwt_required(refresh=True)
@swag_from({
    "tags": ["Auth"],
    "security": [{"BearerAuth": []}],
    "summary": "Revoke the refresh token",
    "responses": {200: {"description": "Refresh token revoked"}, 401: {"description": "Unauthorized"}},
})
def logout_refresh():
    _revoke_current_token("LOGOUT_REFRESH")
    return {"message": "Refresh token revoked"}, 200
