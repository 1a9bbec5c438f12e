"""Signed-in user state for the client shell."""

import logging

from client.api_client import ServiceError

logger = logging.getLogger(__name__)


class AuthSession:
    def __init__(self, auth_service, toaster):
        self.auth_service = auth_service
        self.toaster = toaster
        self.user = auth_service.current_user()

    @property
    def role(self):
        return self.user["role"] if self.user else None

    def login(self, email, password):
        try:
            user = self.auth_service.login(email, password)
        except ServiceError as exc:
            self.toaster.error(str(exc))
            raise
        logger.info("Signed in as %s", user["email"])
        self.user = user
        self.toaster.success(f"Welcome back, {user['name']}!")
        return user

    def register(self, email, password, name, role):
        try:
            user = self.auth_service.register(email, password, name, role)
        except ServiceError as exc:
            self.toaster.error(str(exc))
            raise
        if user is None:
            self.toaster.info("Registration successful! Your account is pending approval by admin.")
            return None
        self.user = user
        self.toaster.success("Registration successful!")
        return user

    def logout(self):
        logger.info("Signing out")
        self.auth_service.logout()
        self.user = None
        self.toaster.info("You have been logged out")
