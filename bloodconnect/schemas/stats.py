from pydantic import BaseModel

class AdminStatsResponse(BaseModel):
    total_donors: int
    approved_donors: int
    pending_donors: int
    total_requests: int
    active_requests: int
    completed_requests: int
    total_donations: int
    today_donations: int
    completion_rate: int  # percent of all requests that were completed

class PublicStatsResponse(BaseModel):
    """Public dashboard figures. Never includes unapproved data."""
    total_donors: int
    total_donations: int
    active_requests: int
    completed_requests: int
