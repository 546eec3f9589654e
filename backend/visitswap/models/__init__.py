"""Models package."""
from visitswap.models.user import User
from visitswap.models.site import Site
from visitswap.models.visit_log import VisitLog
from visitswap.models.credit_log import CreditLog

__all__ = ["User", "Site", "VisitLog", "CreditLog"]
