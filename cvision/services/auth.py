# cvision/services/auth.py
import logging
from datetime import timedelta

from flask import current_app
from flask_jwt_extended import create_access_token

from cvision.models.user import User
from cvision.extensions import db, bcrypt
from cvision.services.errors import Conflict, InvalidPayload, Unauthenticated

logger = logging.getLogger(__name__)

ROLES = ("applicant", "recruiter")


class AuthService:
    @staticmethod
    def issue_token(user):
        hours = current_app.config.get("JWT_ACCESS_TOKEN_HOURS", 3)
        return create_access_token(
            identity=str(user.id),
            additional_claims={
                "role": user.role,
                "email": user.email
            },
            expires_delta=timedelta(hours=hours)
        )

    @staticmethod
    def authenticate_user(email, password, selected_role):
        """
        Check email & password using bcrypt, verify selected_role matches actual role.
        Return JWT if valid.
        """
        logger.info("Auth attempt: %s, role: %s", email, selected_role)

        user = User.query.filter_by(email=email).first()

        if not user or not bcrypt.check_password_hash(user.password, password):
            logger.info("Invalid credentials for %s", email)
            raise Unauthenticated("Invalid email or password")

        if user.role != selected_role:
            logger.info("Role mismatch for %s: expected %s, got %s", email, selected_role, user.role)
            raise Unauthenticated(f"This account does not have the {selected_role} role")

        return AuthService.issue_token(user)

    @staticmethod
    def register(name, email, password, selected_role):
        """
        Create new user with the defined role.
        Return JWT after successful registration.
        """
        if selected_role not in ROLES:
            raise InvalidPayload(f"role must be one of: {', '.join(ROLES)}")

        if User.query.filter_by(email=email).first():
            raise Conflict("Email already registered")

        user = User(
            name=name,
            email=email,
            password=bcrypt.generate_password_hash(password).decode("utf-8"),
            role=selected_role
        )

        try:
            db.session.add(user)
            db.session.commit()
        except Exception:
            db.session.rollback()
            logger.exception("Registration failed for %s", email)
            raise

        logger.info("Registered %s as %s", email, selected_role)
        return AuthService.issue_token(user)
