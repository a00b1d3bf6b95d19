from contextlib import contextmanager
from flask import current_app
from sqlalchemy.exc import DBAPIError, IntegrityError
from chemistry.extensions import db
from chemistry.domain.exceptions import PersistenceFailure, ValidationError


@contextmanager
def transactional():
    """
    Context manager for database transactions.

    Commits on success; any failure rolls back every change made inside
    the block before the error propagates.
    """
    try:
        yield
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        current_app.logger.info("Integrity violation rolled back: %s", exc.orig)
        raise ValidationError.single("base", "conflicts with an existing record") from exc
    except DBAPIError as exc:
        db.session.rollback()
        current_app.logger.error("Database failure, transaction rolled back: %s", exc)
        raise PersistenceFailure(str(exc.orig)) from exc
    except Exception:
        db.session.rollback()
        raise
