from .user import User
from .page import Page
from .section import Section
from .section_type import SectionType
from .social import Social
from .page_version import PageVersion
from .enquiry import Enquiry
from .audit_log import AuditLog
