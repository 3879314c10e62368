from typing import List, Optional
from sqlalchemy import delete, update
from sqlalchemy.orm import Session
from sqlalchemy.orm.attributes import set_committed_value
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
import logging

from shortlinks.db.models import LinkRecord

logger = logging.getLogger(__name__)


def get_url_by_short_code(db: Session, short_code: str) -> Optional[LinkRecord]:
    return db.query(LinkRecord).filter(LinkRecord.short_code == short_code).first()


def get_url_by_original(db: Session, original_url: str) -> Optional[LinkRecord]:
    return db.query(LinkRecord).filter(LinkRecord.original_url == original_url).first()


def list_newest_first(db: Session) -> List[LinkRecord]:
    return (
        db.query(LinkRecord)
        .order_by(LinkRecord.created_at.desc())
        .populate_existing()
        .all()
    )


def create_url(db: Session, short_code: str, original_url: str) -> LinkRecord:
    db_url = LinkRecord(short_code=short_code, original_url=original_url, clicks=0)
    try:
        db.add(db_url)
        db.commit()
        db.refresh(db_url)
        return db_url
    except IntegrityError as e:
        db.rollback()
        logger.warning(
            "IntegrityError creating LinkRecord short_code=%s original=%s: %s",
            short_code, original_url[:50], str(e.orig)
        )
        raise
    except SQLAlchemyError:
        db.rollback()
        raise


def increment_click(db: Session, short_code: str) -> Optional[LinkRecord]:
    """
    Bump the counter with a single UPDATE ... RETURNING so concurrent
    redirects never read-modify-write in Python.
    """
    row = db.execute(
        update(LinkRecord)
        .where(LinkRecord.short_code == short_code)
        .values(clicks=LinkRecord.clicks + 1)
        .returning(LinkRecord.id, LinkRecord.clicks)
        .execution_options(synchronize_session=False)
    ).first()
    db.commit()
    if row is None:
        return None

    db_url = db.get(LinkRecord, row.id, populate_existing=True)
    if db_url is not None:
        # Report the value this call produced, not a later concurrent one
        set_committed_value(db_url, "clicks", row.clicks)
    return db_url


def delete_url(db: Session, record_id: str) -> int:
    result = db.execute(delete(LinkRecord).where(LinkRecord.id == record_id))
    db.commit()
    return result.rowcount
