"""Pydantic schemas used across the project."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LoginRequest(BaseModel):
    username: str
    password: str


class UserInfo(BaseModel):
    username: str


class LoginResponse(BaseModel):
    token: str
    user: UserInfo


class TokenData(BaseModel):
    account_id: str
    username: str
    issued_at: datetime
    expires_at: datetime


class ErrorResponse(BaseModel):
    error: str


class MessageResponse(BaseModel):
    message: str


class UploadResponse(BaseModel):
    id: str
    message: str


class PackageResponse(CamelModel):
    id: str
    name: str
    version: str
    developer: str
    category: str
    description: str
    size: str
    upload_date: datetime
    status: str
    icon_url: str


class PackageUpdate(CamelModel):
    """Full replacement of the editable package fields."""

    name: str = Field(..., min_length=1, max_length=150)
    version: str = Field(..., min_length=1, max_length=50)
    developer: str = Field(..., max_length=150)
    category: str
    description: str
    size: str = Field(..., max_length=30)
    icon_url: str = Field(..., max_length=500)


class AnalysisRequest(BaseModel):
    name: str = Field(..., min_length=1)
    description: str = ""


class SafetyReportResponse(CamelModel):
    security_score: float
    compatibility: str
    recommendations: list[str] = Field(default_factory=list)
    vulnerabilities_found: int
