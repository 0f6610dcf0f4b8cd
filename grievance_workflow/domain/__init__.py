"""Domain layer: roles, grievance records, audit events and the error taxonomy."""
