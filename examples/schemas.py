from pydantic import BaseModel, ConfigDict
from typing import Optional
import datetime
from enum import Enum


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class IssueStatus(str, Enum):
    OPEN = "open"
    CLOSED = "closed"


# -------------------
# Reporter Schemas
# -------------------

class ReporterResponse(BaseModel):
    id: int
    name: str
    email: str

    model_config = ConfigDict(from_attributes=True)


# -------------------
# Issue Schemas
# -------------------

class IssueResponse(BaseModel):
    id: int
    title: str
    severity: Severity
    status: IssueStatus
    votes: int
    created_at: datetime.datetime
    reporter: Optional[ReporterResponse]

    model_config = ConfigDict(from_attributes=True)
