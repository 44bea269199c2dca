"""
Common response schemas for API endpoints.

This module defines Pydantic models for endpoints that would otherwise
return raw dictionaries, keeping the OpenAPI documentation explicit.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Standard response for operations that return a success message."""

    message: str = Field(
        ...,
        description="Success message describing the completed operation",
        examples=["Item deleted successfully"],
    )


class ServiceInfoResponse(BaseModel):
    """Response schema for the service root."""

    message: str = Field(..., examples=["Costume Rental API"])
    version: str = Field(..., examples=["1.0.0"])


class HealthCheckResponse(BaseModel):
    """Response schema for health check endpoints."""

    status: str = Field(..., description="Service health status", examples=["healthy"])
    timestamp: datetime = Field(..., description="Health check timestamp")
    version: str = Field(..., description="API version", examples=["1.0.0"])
    database: str = Field(
        ..., description="Database connection status", examples=["connected"]
    )


class DashboardStats(BaseModel):
    """Aggregate figures for the admin dashboard, computed at request time."""

    total_revenue: Decimal = Field(
        ..., description="Sum of total amounts of paid bookings", examples=[4500.00]
    )
    active_rentals: int = Field(
        ..., description="Number of bookings currently active", examples=[12]
    )
    available_items: int = Field(
        ..., description="Number of items ready to rent", examples=[87]
    )
    overdue_returns: int = Field(
        ..., description="Active bookings past their end date, plus overdue ones", examples=[2]
    )


class AvailabilityResponse(BaseModel):
    """Response schema for item availability checks."""

    item_id: str = Field(..., description="ID of the item being checked")
    available: bool = Field(
        ..., description="Whether the item can be rented for the requested dates"
    )


class ErrorResponse(BaseModel):
    """Standard error response schema."""

    detail: str = Field(..., description="Human-readable error message")
    error_type: str = Field(..., examples=["conflict_error"])
    details: dict = Field(default_factory=dict)
