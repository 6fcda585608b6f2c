from typing import Dict, List, Optional
from datetime import datetime
from pydantic import BaseModel, Field

# --- Team Roster ---

class MemberUpsert(BaseModel):
    name: str = Field(..., description="Unique display name of the member")
    email: Optional[str] = None
    capacity: Optional[float] = Field(None, description="Default weekly capacity in hours")
    role: Optional[str] = Field(None, description="admin or user")

class MemberResponse(BaseModel):
    id: str
    name: str
    email: Optional[str] = None
    capacity: float
    role: str

    class Config:
        from_attributes = True

# --- Capacity Overrides ---

class OverrideSet(BaseModel):
    member_id: str
    capacity: float = Field(..., description="Sprint-local capacity in hours, must be positive")

class GroupOverridesResponse(BaseModel):
    group_id: str
    overrides: Dict[str, float] = Field(default_factory=dict, description="member_id -> capacity")

# --- Board ---

class GroupResponse(BaseModel):
    id: str
    title: str

    class Config:
        from_attributes = True

class TaskResponse(BaseModel):
    id: str
    name: str
    assignee: str
    effort: float
    status: str
    group_id: str
    is_subitem: bool
    parent_id: Optional[str] = None
    due_date: Optional[str] = None
    effort_provided: bool

    class Config:
        from_attributes = True

# --- Workload ---

class WorkloadRowResponse(BaseModel):
    member_id: Optional[str] = None
    name: str
    capacity: float
    default_capacity: float
    workload: float
    overridden: bool
    overloaded: bool
    utilization: float

    class Config:
        from_attributes = True

class WorkloadViewResponse(BaseModel):
    group_id: Optional[str] = None
    rows: List[WorkloadRowResponse]
    unrostered: List[WorkloadRowResponse] = Field(default_factory=list)
    generated_at: datetime
    stale: bool = False

    class Config:
        from_attributes = True

class TriageResponse(BaseModel):
    group_id: Optional[str] = None
    total: int
    both: List[TaskResponse]
    unassigned: List[TaskResponse]
    missing_effort: List[TaskResponse]
