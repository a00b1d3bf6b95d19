import re
from typing import Any, Dict, Optional
from flask import current_app
from chemistry.extensions import db
from chemistry.models.enquiry import Enquiry
from chemistry.domain.exceptions import ValidationError
from chemistry.domain.invariants.fields import string_errors
from chemistry.utils.transaction import transactional

EMAIL_PATTERN = re.compile(r"^([\w.%+\-]+)@([\w\-]+\.)+([\w]{2,})$", re.IGNORECASE)
ENQUIRY_FIELDS = ("name", "email", "message")


def validate_enquiry(data: Dict[str, Any]):
    errors = string_errors(data, ENQUIRY_FIELDS)
    if errors:
        return errors

    if not (data.get("name") or "").strip():
        errors.append(("name", "can't be blank"))
    if not (data.get("message") or "").strip():
        errors.append(("message", "can't be blank"))
    if not EMAIL_PATTERN.match((data.get("email") or "").strip()):
        errors.append(("email", "is invalid"))
    return errors


def submit_enquiry(
    *,
    data: Dict[str, Any],
    remote_ip: Optional[str] = None,
    user_agent: Optional[str] = None,
) -> Optional[Enquiry]:
    """
    Record a contact enquiry for the mailer.

    A filled ``robot`` honeypot marks the submission as spam: it is accepted
    without error but nothing is stored and None is returned.
    """
    errors = validate_enquiry(data)
    if errors:
        raise ValidationError(errors)

    if data.get("robot"):
        current_app.logger.info("Discarded enquiry from %s: honeypot filled", remote_ip)
        return None

    enquiry = Enquiry()
    enquiry.name = data["name"].strip()
    enquiry.email = data["email"].strip()
    enquiry.message = data["message"].strip()
    enquiry.remote_ip = remote_ip
    enquiry.user_agent = (user_agent or "")[:512] or None
    enquiry.mail_to = current_app.config.get("CHEMISTRY_ENQUIRY_MAIL_TO") or None
    enquiry.subject = current_app.config.get("CHEMISTRY_ENQUIRY_SUBJECT")
    enquiry.closed = False

    with transactional():
        db.session.add(enquiry)

    current_app.logger.info("Enquiry %s received from %s", enquiry.id, enquiry.email)
    return enquiry
