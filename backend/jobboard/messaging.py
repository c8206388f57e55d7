# Messaging store: direct messages between users

import logging
import time

from .errors import NotFoundError
from .storage import JsonDocument
from .users import CredentialStore


class MessageStore:
    def __init__(self, document: JsonDocument, users: CredentialStore):
        self._document = document
        self.users = users
        self.messages = document.load()

    def append(self, sender, recipient, text) -> dict:
        if not self.users.email_exists(recipient):
            raise NotFoundError('Recipient not found')
        message = {
            'from': sender,
            'to': recipient,
            'message': text,
            'timestamp': int(time.time() * 1000),
        }
        self.messages.append(message)
        self._document.save(self.messages)
        logging.debug(f'Stored message {sender} -> {recipient}')
        return message

    def conversation(self, user_a, user_b) -> list:
        """Messages between the two users in either direction, oldest first.
        Ties keep insertion order."""
        thread = [
            m for m in self.messages
            if (m.get('from') == user_a and m.get('to') == user_b)
            or (m.get('from') == user_b and m.get('to') == user_a)
        ]
        return sorted(thread, key=lambda m: m.get('timestamp') or 0)
