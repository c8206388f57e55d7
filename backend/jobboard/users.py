# Credential store: accounts and profile fields

import logging
from typing import Optional

from .errors import AuthError, ConflictError, ValidationError
from .security import generate_salt, hash_password, is_strong_password, normalize_salt
from .storage import JsonDocument


class CredentialStore:
    """Owns the user collection. Listings are embedded in each user record,
    so :class:`~jobboard.listings.ListingStore` persists through ``save``."""

    def __init__(self, document: JsonDocument):
        self._document = document
        self.users = document.load()
        for user in self.users:
            if isinstance(user, dict) and 'salt' in user:
                user['salt'] = normalize_salt(user['salt'])

    def save(self):
        self._document.save(self.users)

    def get(self, index: int) -> dict:
        return self.users[index]

    def email_exists(self, email) -> bool:
        return any(u.get('email') == email for u in self.users)

    def create_account(self, password, email, first_name, last_name, location) -> dict:
        email = str(email)
        if self.email_exists(email):
            raise ConflictError('Email already exists')
        salt = generate_salt()
        user = {
            'email': email,
            'first_name': str(first_name),
            'last_name': str(last_name),
            'location': str(location),
            'password': hash_password(password, salt),
            'salt': salt,
            'listings': [],
            'profile_pic': '',
        }
        self.users.append(user)
        try:
            self.save()
        except Exception:
            # keep memory in line with the document on disk
            self.users.pop()
            raise
        logging.info(f'Created user: {email}')
        return user

    def authenticate(self, email, password) -> Optional[int]:
        """Index of the user whose email matches exactly and whose stored hash
        matches ``password``, or None."""
        for index, user in enumerate(self.users):
            if user.get('email') != email:
                continue
            if user.get('password') == hash_password(password, user.get('salt')):
                return index
        return None

    def require(self, email, password) -> int:
        index = self.authenticate(email, password)
        if index is None:
            logging.debug(f'Credential check failed for {email}')
            raise AuthError()
        return index

    def profile(self, index: int) -> dict:
        user = self.users[index]
        return {
            'first_name': user.get('first_name') or '',
            'last_name': user.get('last_name') or '',
            'email': user.get('email') or '',
            'location': user.get('location') or '',
            'profile_pic': user.get('profile_pic') or '',
        }

    # --- Profile changes; each one re-checks the credentials first ---

    def change_email(self, email, password, new_email) -> str:
        index = self.require(email, password)
        if new_email is None:
            raise ValidationError('Missing new_email')
        if not isinstance(new_email, str):
            raise ValidationError('new_email must be a string')
        if new_email != email and self.email_exists(new_email):
            raise ConflictError('Email already exists')
        self.users[index]['email'] = new_email
        self.save()
        logging.info(f'Changed email {email} -> {new_email}')
        return new_email

    def change_password(self, email, password, new_password):
        index = self.require(email, password)
        if not is_strong_password(new_password):
            raise ValidationError('New password does not meet strength requirements')
        user = self.users[index]
        user['password'] = hash_password(new_password, user['salt'])
        self.save()
        logging.info(f'Changed password for {email}')

    def change_age(self, email, password, age):
        index = self.require(email, password)
        self.users[index]['age'] = age
        self.save()

    def change_name(self, email, password, first_name, last_name):
        index = self.require(email, password)
        if not first_name or not last_name:
            raise ValidationError('First name and last name are required')
        self.users[index]['first_name'] = first_name
        self.users[index]['last_name'] = last_name
        self.save()

    def change_location(self, email, password, location):
        index = self.require(email, password)
        self.users[index]['location'] = location
        self.save()
