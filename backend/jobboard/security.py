# Password hashing, password policy and random tokens

import logging
import re

from Crypto.Hash import SHA256
from Crypto.Random import get_random_bytes, random

SALT_UPPER_BOUND = 10 ** 9

# min 8 chars, one lowercase, one uppercase, one digit, one special (underscore counts)
_STRONG_PASSWORD = re.compile(r'(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[\W_]).{8,}\Z', re.ASCII)

PASSWORD_POLICY = (
    'Password must be at least 8 characters and include uppercase, '
    'lowercase, a number, and a special character.'
)

# --- Hashing ---

def sha256_hex(data: bytes) -> str:
    return SHA256.new(data).hexdigest()

def hash_password(password: str, salt) -> str:
    """Digest of the plaintext concatenated with the salt's decimal form."""
    return sha256_hex(f'{password}{salt}'.encode('utf-8'))

def generate_salt() -> int:
    return random.randrange(SALT_UPPER_BOUND)

def normalize_salt(salt):
    """Older records stored the salt as a numeric string. Coerce those to int
    so that hashing sees the same decimal form as at creation."""
    if isinstance(salt, str) and salt.isascii() and salt.isdigit():
        logging.debug('Normalizing string salt to integer')
        return int(salt)
    return salt

# --- Policy ---

def is_strong_password(password) -> bool:
    if not password or not isinstance(password, str):
        return False
    return _STRONG_PASSWORD.match(password) is not None

# --- Tokens ---

def random_hex(nbytes: int) -> str:
    return get_random_bytes(nbytes).hex()
