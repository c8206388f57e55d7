# JSON documents on local disk

import json
import logging
import os
import tempfile


class JsonDocument:
    """A JSON array stored in a single file.

    The whole collection is read once with ``load`` and written back in full
    with ``save``. Saves go through a temporary file in the same directory
    followed by ``os.replace``, so readers never see a partial document.
    """

    def __init__(self, path: str):
        self.path = path

    def load(self) -> list:
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                raw = f.read()
            records = json.loads(raw) if raw else []
            if not isinstance(records, list):
                raise ValueError('document is not a JSON array')
        except (OSError, ValueError) as e:
            logging.warning(f'Could not read {self.path} ({e}); starting with an empty collection')
            records = []
            self.save(records)
        logging.debug(f'Loaded {len(records)} records from {self.path}')
        return records

    def save(self, records: list):
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix='.tmp-', suffix='.json')
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(records, f, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            try:
                os.remove(tmp_path)
            except OSError:
                pass
            raise
