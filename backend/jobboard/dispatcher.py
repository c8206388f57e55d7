# Routes one decoded request body to the stores and shapes the JSON reply

import logging
import threading
from typing import Optional

from .commands import (
    ChangeAge,
    ChangeEmail,
    ChangeLocation,
    ChangeName,
    ChangePassword,
    CreateListing,
    DeleteListing,
    GetLocation,
    GetMessages,
    GetMyListings,
    GetProfile,
    Login,
    SearchJobs,
    SendMessage,
    SignUp,
    parse_command,
)
from .errors import ApiError, AuthError, ConflictError, InternalError, ValidationError
from .listings import ListingStore
from .messaging import MessageStore
from .security import PASSWORD_POLICY, is_strong_password
from .users import CredentialStore


class CommandDispatcher:
    """Runs one command at a time against the injected stores.

    There are no sessions: every command other than ``login`` and
    ``sign_up`` carries ``email`` and ``password`` and is checked on its own.
    """

    def __init__(self, users: CredentialStore, listings: ListingStore, messages: MessageStore):
        self.users = users
        self.listings = listings
        self.messages = messages
        self._lock = threading.Lock()
        self._handlers = {
            Login: self.login,
            SignUp: self.sign_up,
            ChangeEmail: self.change_email,
            ChangePassword: self.change_password,
            ChangeAge: self.change_age,
            ChangeName: self.change_name,
            ChangeLocation: self.change_location,
            GetLocation: self.get_location,
            SearchJobs: self.search_jobs,
            GetMessages: self.get_messages,
            SendMessage: self.send_message,
            CreateListing: self.create_listing,
            GetProfile: self.get_profile,
            GetMyListings: self.get_my_listings,
            DeleteListing: self.delete_listing,
        }

    def dispatch(self, payload) -> dict:
        """Run the command in ``payload`` and return the success body.
        Failures are raised as :class:`~jobboard.errors.ApiError`."""
        command = parse_command(payload)
        handler = self._handlers[type(command)]
        with self._lock:
            try:
                owner = None
                if command.needs_owner:
                    owner = self.users.require(command.email, command.password)
                return handler(command, owner)
            except AuthError as e:
                if command.reports_success:
                    raise AuthError(None, success=False) from e
                raise
            except ApiError as e:
                if command.reports_success:
                    e.fields.setdefault('success', False)
                raise

    # --- Account ---

    def login(self, command: Login, owner: Optional[int]) -> dict:
        index = self.users.authenticate(command.username, command.password)
        if index is not None:
            logging.info(f'Login success for {command.username}')
        return {'data': {'login_success': 1 if index is not None else 0}}

    def sign_up(self, command: SignUp, owner: Optional[int]) -> dict:
        missing = command.missing_fields()
        if missing:
            logging.error(f'Sign up failed - missing fields: {missing}')
            raise ValidationError('Missing required fields', missing=missing)

        if not is_strong_password(command.password):
            logging.error(f'Sign up failed - weak password for: {command.email}')
            raise ValidationError('Weak password', message=PASSWORD_POLICY)

        try:
            self.users.create_account(
                command.password,
                command.email,
                command.first_name,
                command.last_name,
                command.location,
            )
        except ConflictError:
            logging.error(f'Sign up failed - email already exists: {command.email}')
            raise
        except Exception as e:
            logging.exception('Sign up failed - error creating account')
            raise InternalError('Failed to create account', details=str(e)) from e

        logging.info(f'Sign up successful for: {command.email}')
        return {'data': {'signed_up': 1}}

    # --- Profile ---

    def change_email(self, command: ChangeEmail, owner: Optional[int]) -> dict:
        new_email = self.users.change_email(command.email, command.password, command.new_email)
        return {'success': True, 'new_email': new_email}

    def change_password(self, command: ChangePassword, owner: Optional[int]) -> dict:
        self.users.change_password(command.email, command.password, command.new_password)
        return {'success': True}

    def change_age(self, command: ChangeAge, owner: Optional[int]) -> dict:
        self.users.change_age(command.email, command.password, command.age)
        return {'success': True}

    def change_name(self, command: ChangeName, owner: Optional[int]) -> dict:
        self.users.change_name(command.email, command.password, command.first_name, command.last_name)
        return {'success': True}

    def change_location(self, command: ChangeLocation, owner: Optional[int]) -> dict:
        self.users.change_location(command.email, command.password, command.location)
        return {'success': True}

    def get_location(self, command: GetLocation, owner: Optional[int]) -> dict:
        return {'data': {'location': self.users.get(owner).get('location')}}

    def get_profile(self, command: GetProfile, owner: Optional[int]) -> dict:
        return {'success': True, 'profile': self.users.profile(owner)}

    # --- Listings ---

    def search_jobs(self, command: SearchJobs, owner: Optional[int]) -> dict:
        return {'data': {'listings_to_return': self.listings.search(command.job_search)}}

    def create_listing(self, command: CreateListing, owner: Optional[int]) -> dict:
        self.listings.create(owner, command.listing_fields(), command.pic)
        return {'data': {'successfully_made_listing': 1}}

    def get_my_listings(self, command: GetMyListings, owner: Optional[int]) -> dict:
        return {'success': True, 'listings': self.listings.list_own(owner)}

    def delete_listing(self, command: DeleteListing, owner: Optional[int]) -> dict:
        if not command.listing_id:
            raise ValidationError('Missing listing_id')
        self.listings.delete(owner, command.listing_id)
        return {'success': True}

    # --- Messages ---

    def get_messages(self, command: GetMessages, owner: Optional[int]) -> dict:
        return {'success': True, 'messages': self.messages.conversation(command.email, command.other_user)}

    def send_message(self, command: SendMessage, owner: Optional[int]) -> dict:
        if not command.to or not command.message:
            raise ValidationError('Missing recipient or message')
        self.messages.append(command.email, command.to, command.message)
        return {'success': True}
