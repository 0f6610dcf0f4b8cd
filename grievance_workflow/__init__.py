"""
Grievance Workflow - role-gated complaint escalation system

Complaints submitted by students move through a fixed approval hierarchy
(Counselor -> Year Coordinator -> HOD -> Dean). Every transition is gated
by the caller's role and the record's current escalation tier, and every
successful mutation is witnessed by an append-only audit log.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
