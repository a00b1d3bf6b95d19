from typing import Any, Dict
from chemistry.models.enquiry import Enquiry


def normalize_enquiry(enquiry: Enquiry) -> Dict[str, Any]:
    return {
        "id": enquiry.id,
        "name": enquiry.name,
        "email": enquiry.email,
        "message": enquiry.message,
        "closed": enquiry.closed,
        "remote_ip": enquiry.remote_ip,
        "created_at": enquiry.created_at.isoformat() if enquiry.created_at else None,
    }
