"""Root of the grievance workflow exception hierarchy."""


class GrievanceWorkflowError(Exception):
    """Anything the workflow raises on purpose.

    Business rejections derive from GrievanceRejectionError; infrastructure
    faults such as AuditEmissionError derive from this class directly.
    """
