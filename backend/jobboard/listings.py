# Listing store: per-user job listings and their uploaded images

import base64
import binascii
import logging
import os
import re
import time

from .errors import NotFoundError
from .security import random_hex
from .users import CredentialStore

# Caller-supplied listing fields, copied as-is
LISTING_FIELDS = (
    'listing_title',
    'description',
    'age',
    'age_suggested',
    'age_required',
    'city',
    'date',
    'payinfo',
)

_DATA_URI = re.compile(r'data:(.+?);base64,(.+)')


def _now_ms() -> int:
    return int(time.time() * 1000)


class ListingStore:
    def __init__(self, users: CredentialStore, upload_folder: str, url_prefix: str = '/uploads'):
        self.users = users
        self.upload_folder = upload_folder
        self.url_prefix = '/' + url_prefix.strip('/')

    def search(self, query) -> list:
        """Case-insensitive substring search over titles and descriptions of
        every user's listings. Each hit is a copy carrying ``user_email``."""
        needle = str(query).lower() if query else ''
        results = []
        for user in self.users.users:
            for listing in user.get('listings') or []:
                title = str(listing.get('listing_title') or '').lower()
                description = str(listing.get('description') or '').lower()
                if needle in title or needle in description:
                    results.append({**listing, 'user_email': user.get('email')})
        logging.debug(f'Search for {needle!r} matched {len(results)} listings')
        return results

    def list_own(self, owner_index: int) -> list:
        return self.users.get(owner_index).get('listings') or []

    def create(self, owner_index: int, fields: dict, images=None) -> dict:
        owner = self.users.get(owner_index)
        # absent fields are left out of the stored record, not stored as null
        listing = {name: fields[name] for name in LISTING_FIELDS if fields.get(name) is not None}
        listing['pic'] = self.save_images(images)
        listing['ownerEmail'] = owner.get('email')
        listing['id'] = random_hex(8)
        listing['created_at'] = _now_ms()

        owner.setdefault('listings', []).append(listing)
        self.users.save()
        logging.info(f'Created listing {listing["id"]} for {owner.get("email")}')
        return listing

    def delete(self, owner_index: int, listing_id):
        owner = self.users.get(owner_index)
        listings = owner.get('listings') or []
        for pos, listing in enumerate(listings):
            if listing.get('id') == listing_id:
                break
        else:
            raise NotFoundError('Listing not found')

        self.remove_images(listing.get('pic'))
        del listings[pos]
        owner['listings'] = listings
        self.users.save()
        logging.info(f'Deleted listing {listing_id} for {owner.get("email")}')

    # --- Images (best-effort, non-fatal) ---

    def save_images(self, images) -> list:
        """Decode ``data:<mime>;base64,<payload>`` entries into the uploads
        folder. Entries that do not decode are skipped."""
        if not isinstance(images, list):
            return []
        os.makedirs(self.upload_folder, exist_ok=True)
        paths = []
        for image in images:
            match = _DATA_URI.fullmatch(image) if isinstance(image, str) else None
            if not match:
                logging.debug('Skipping image that is not a base64 data URI')
                continue
            mime_type, payload = match.groups()
            try:
                # padding is optional in uploaded payloads
                data = base64.b64decode(payload + '=' * (-len(payload) % 4))
            except (binascii.Error, ValueError):
                logging.debug(f'Skipping image with undecodable {mime_type} payload')
                continue
            parts = mime_type.split('/')
            subtype = parts[1] if len(parts) > 1 else ''
            filename = f'{random_hex(16)}.{subtype or "bin"}'
            with open(os.path.join(self.upload_folder, filename), 'wb') as f:
                f.write(data)
            paths.append(f'{self.url_prefix}/{filename}')
        return paths

    def image_path(self, pic: str) -> str:
        """Filesystem path of a stored ``/uploads/<file>`` reference."""
        return os.path.join(self.upload_folder, os.path.basename(pic))

    def remove_images(self, pics):
        if not isinstance(pics, list):
            return
        for pic in pics:
            if not isinstance(pic, str):
                continue
            path = self.image_path(pic)
            try:
                if os.path.exists(path):
                    os.remove(path)
            except OSError as e:
                logging.warning(f'Could not remove image {path}: {e}')
