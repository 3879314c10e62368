from contextlib import contextmanager
from typing import List, Optional, Tuple
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from shortlinks.core.errors import ConflictError, NotFoundError, StoreError, ValidationError
from shortlinks.db import repository
from shortlinks.db.models import LinkRecord
from shortlinks.utils.encoding import SHORT_CODE_LENGTH, generate_short_code, is_reserved

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 5


class LinkRegistry:
    """Owns the mapping between original URLs and short codes.

    The registry wraps one SQLAlchemy session supplied by the caller; it never
    opens connections of its own. Database failures surface as StoreError.
    """

    def __init__(self, db: Session, code_length: int = SHORT_CODE_LENGTH,
                 max_attempts: int = DEFAULT_MAX_ATTEMPTS):
        self.db = db
        self.code_length = code_length
        self.max_attempts = max_attempts

    @contextmanager
    def _store_errors(self, operation: str):
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("%s failed: %s", operation, e, exc_info=True)
            raise StoreError(f"{operation} failed") from e

    @staticmethod
    def _require_url(original_url: Optional[str]) -> str:
        # Presence only; the URL is stored exactly as sent
        if not isinstance(original_url, str) or not original_url:
            raise ValidationError("URL is required")
        return original_url

    def create(self, original_url: Optional[str]) -> Tuple[LinkRecord, bool]:
        """Return the record for original_url and whether it was newly created.

        An existing record for the same URL is returned unchanged. Short-code
        collisions are retried with a fresh code up to max_attempts times,
        then reported as ConflictError.
        """
        original_url = self._require_url(original_url)

        with self._store_errors("create"):
            existing = repository.get_url_by_original(self.db, original_url)
            if existing:
                logger.info("short URL already existed : '%s' for URL: %s", existing.short_code, original_url[:50])
                return existing, False

            for attempt in range(self.max_attempts):
                short_code = generate_short_code(self.code_length)
                if is_reserved(short_code):
                    continue
                try:
                    url_item = repository.create_url(self.db, short_code, original_url)
                except IntegrityError:
                    # A concurrent request may have stored the same URL first
                    existing = repository.get_url_by_original(self.db, original_url)
                    if existing:
                        return existing, False
                    logger.info(f"Short code collision on attempt {attempt + 1}/{self.max_attempts}")
                    continue

                logger.info("Shortened %s to %s", original_url[:50], url_item.short_code)
                return url_item, True

        raise ConflictError(f"Failed to generate unique short code after {self.max_attempts} attempts")

    def list(self) -> List[LinkRecord]:
        with self._store_errors("list"):
            return repository.list_newest_first(self.db)

    def get(self, short_code: str) -> LinkRecord:
        with self._store_errors("get"):
            url_item = repository.get_url_by_short_code(self.db, short_code)
        if url_item is None:
            raise NotFoundError(f"Short code not found: {short_code}")
        return url_item

    def resolve_and_increment(self, short_code: str) -> LinkRecord:
        with self._store_errors("resolve"):
            url_item = repository.increment_click(self.db, short_code)
        if url_item is None:
            raise NotFoundError(f"Short code not found: {short_code}")
        return url_item

    def delete(self, record_id: str) -> None:
        with self._store_errors("delete"):
            deleted = repository.delete_url(self.db, record_id)
        if deleted:
            logger.info("Deleted link %s", record_id)
        else:
            logger.info("Delete of unknown link %s ignored", record_id)
