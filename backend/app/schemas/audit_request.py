"""
Pydantic schemas for audit requests.
"""
from typing import Optional

from pydantic import BaseModel, Field


class AuditRequest(BaseModel):
    """Request to score a site."""
    # Validated by the runner so a missing or bad URL answers 400, not 422
    siteUrl: Optional[str] = Field(None, description="URL to audit")
    keyword: Optional[str] = Field(None, description="Search term for the rank check")
    location: Optional[str] = Field(None, description="SerpApi location for the rank check")

    class Config:
        json_schema_extra = {
            "example": {
                "siteUrl": "https://www.example.com",
                "keyword": "example widgets",
                "location": "Austin, Texas, United States"
            }
        }
