"""Application-wide constants."""


class SiteStatus:
    """Site status constants."""
    ACTIVE = "active"
    INACTIVE = "inactive"


class CreditType:
    """Credit log entry types."""
    EARN = "earn"
    SPEND = "spend"


class RelatedModel:
    """Record kinds a credit log entry may point at."""
    VISIT_LOG = "VisitLog"
    SITE = "Site"


VISIT_COMPLETED_REASON = "Visit completed"
