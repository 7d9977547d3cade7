from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class SearchRequestBody(BaseModel):
    industries: List[str] = Field(default_factory=list, description="Industries to match, e.g. 'corporate wellness'")
    locations: List[str] = Field(default_factory=list, description="Locations such as 'Kuala Lumpur' or 'Selangor'")
    min_budget_rm: Optional[float] = Field(None, ge=0, description="Minimum budget in RM (informational only)")
    time_range_days: int = Field(7, ge=0, le=3650, description="Only include items published within this many days")
    limit: int = Field(5, ge=0, le=50, description="Maximum number of opportunities to return")
    language: Literal["en", "zh", "ms"] = Field("en", description="Opening line language")


class SuggestedMemberResponse(BaseModel):
    name: str
    specialty: str
    chapter_role: str


class OpportunityResponse(BaseModel):
    id: str = Field(..., description="Identifier unique within the response")
    source: str = Field(..., description="Adapter that produced the item")
    title: str
    summary: str
    url: Optional[str] = None
    published_at: Optional[str] = Field(None, description="ISO-8601 publication time (UTC)")
    location: str
    score: float = Field(..., ge=0, le=1)
    matched_industries: List[str]
    signals: List[str]
    suggested_members: List[SuggestedMemberResponse]
    opening_line: str


class SearchResponse(BaseModel):
    items: List[OpportunityResponse]


class SubscribeResponse(BaseModel):
    status: str
    subscription_id: str


class NotifyRequestBody(BaseModel):
    items: List[str] = Field(default_factory=list, description="Opportunity ids to deliver")
    recipient: Optional[str] = Field(None, description="Recipient phone number or handle")
    template: Optional[str] = Field(None, description="Message template name")


class DeliveryReceiptResponse(BaseModel):
    item_id: str
    recipient: Optional[str] = None
    status: str
    message: str


class NotifyResponse(BaseModel):
    status: str
    count: int
    recipient: Optional[str] = None
    receipts: List[DeliveryReceiptResponse]


class ErrorResponse(BaseModel):
    error: str = Field(..., description="Error message returned from the server")
