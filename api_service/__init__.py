"""
TalentHub list API - FastAPI service serving every paginated listing.

Run with `python -m api_service` or `uvicorn api_service.app:app`.
"""
