import logging
from dataclasses import replace

import db
from credentials import hash_credential, needs_rehash, verify_credential
from models import User

logger = logging.getLogger(__name__)


class Session:
    """
    Holds the logged-in user for one run of the app.
    Created in main.py and handed to the windows that need it.
    """

    def __init__(self):
        self.current_user = None

    @property
    def is_logged_in(self):
        return self.current_user is not None

    @property
    def is_admin(self):
        return self.current_user is not None and self.current_user.is_admin

    def login(self, username, password):
        user = db.get_user_by_username(username)
        if user and verify_credential(password, user.password):
            if needs_rehash(user.password):
                user = replace(user, password=hash_credential(password))
                db.save_user(user)
                logger.info("Upgraded stored password for '%s' to bcrypt", username)
            self.current_user = user
            logger.info("User '%s' logged in", username)
            return user
        logger.info("Failed login for '%s'", username)
        return None

    def register(self, username, password, full_name, email):
        if db.username_exists(username):
            logger.info("Registration refused, username '%s' already taken", username)
            return None
        user = User(
            username=username,
            password=hash_credential(password),
            full_name=full_name,
            email=email,
            role="user",
        )
        db.save_user(user)
        # re-read to pick up created_at from the database
        user = db.get_user_by_id(user.id)
        self.current_user = user
        logger.info("Registered user '%s' (%s)", username, user.id)
        return user

    def logout(self):
        if self.current_user:
            logger.info("User '%s' logged out", self.current_user.username)
        self.current_user = None

    def update_profile(self, full_name, email):
        if self.current_user is None:
            return False
        updated = replace(self.current_user, full_name=full_name, email=email)
        db.save_user(updated)
        self.current_user = updated
        return True

    def change_password(self, old_password, new_password):
        user = self.current_user
        if user is None or not verify_credential(old_password, user.password):
            return False
        updated = replace(user, password=hash_credential(new_password))
        db.save_user(updated)
        self.current_user = updated
        logger.info("Password changed for '%s'", user.username)
        return True
