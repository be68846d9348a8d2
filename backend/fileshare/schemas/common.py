"""Shared Pydantic schemas."""
from pydantic import BaseModel


class StatusResponse(BaseModel):
    status: str = "OK"
    message: str
    timestamp: str


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
