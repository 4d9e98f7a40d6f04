"""
Pydantic schemas for API request/response models.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


# ── Statuses ──

class StatusInfo(BaseModel):
    status: str
    color: str
    css_classes: str
    description: str
    terminal: bool
    destinations: list[str] = []


class StatusListResponse(BaseModel):
    items: list[StatusInfo]


# ── Actor ──

class PermissionInfo(BaseModel):
    key: str
    name: str
    description: str


class ActorProfile(BaseModel):
    user_id: str
    role: str
    permissions: list[str]
    permissions_by_category: dict[str, list[PermissionInfo]]
    can_manage_users: bool
    can_manage_customers: bool
    can_manage_applications: bool
    can_access_system_settings: bool


# ── Applications ──

class ApplicationDocumentSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    document_name: str
    document_category: str
    is_mandatory: bool
    is_uploaded: bool


class ApplicationDetail(BaseModel):
    id: str
    applicant_name: str
    company: str
    email: str
    status: StatusInfo
    created_by: str
    created_by_role: str
    assigned_manager: str | None = None
    partner_id: str | None = None
    document_checklist_complete: bool
    has_required_documents: bool
    documents: list[ApplicationDocumentSchema] = []
    created_at: datetime | None = None
    updated_at: datetime | None = None


class AvailableTransitions(BaseModel):
    application_id: str
    current_status: str
    available: list[str]
    recommended_next: str | None = None


class ApplicationStatusUpdate(BaseModel):
    # Plain strings: the transition table reports unknown targets itself.
    status: str = Field(..., max_length=50)
    comment: str | None = Field(None, max_length=2000)
    expected_status: str | None = Field(None, max_length=50)


class StatusHistoryEntry(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    previous_status: str | None = None
    new_status: str
    changed_by: str
    changed_by_role: str
    comment: str | None = None
    created_at: datetime | None = None


class StatusHistoryResponse(BaseModel):
    application_id: str
    items: list[StatusHistoryEntry]
