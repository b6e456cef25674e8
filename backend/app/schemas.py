from typing import Optional
from pydantic import BaseModel


class AdminLoginRequest(BaseModel):
    email: str
    password: str


class AnalyticsExportRequest(BaseModel):
    period: Optional[str] = None
    date_from: Optional[str] = None
    date_to: Optional[str] = None
