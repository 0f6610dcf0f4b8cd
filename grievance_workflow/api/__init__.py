"""HTTP adapter for the grievance workflow (FastAPI)."""
