from typing import Optional
from chemistry.extensions import db
from chemistry.models.enquiry import Enquiry
from chemistry.domain.exceptions import RecordNotFound
from chemistry.utils.audit import log_action
from chemistry.utils.transaction import transactional


def close_enquiry(*, enquiry_id: str, actor_id: Optional[str] = None) -> Enquiry:
    enquiry = db.session.get(Enquiry, enquiry_id)
    if enquiry is None:
        raise RecordNotFound("Enquiry not found")

    with transactional():
        enquiry.closed = True

        log_action(
            action="enquiry.close",
            entity_type="enquiry",
            entity_id=enquiry.id,
            actor_id=actor_id,
        )

    return enquiry
