from datetime import datetime
from uuid import uuid4

from sqlalchemy import Boolean, String, DateTime, ForeignKey, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backoffice.database import Base


def _uuid() -> str:
    return str(uuid4())


class Application(Base):
    __tablename__ = "applications"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    applicant_name: Mapped[str] = mapped_column(String(200))
    company: Mapped[str] = mapped_column(String(200))
    email: Mapped[str] = mapped_column(String(255))
    status: Mapped[str] = mapped_column(String(20), default="Draft", index=True)
    created_by: Mapped[str] = mapped_column(String(36), index=True)
    created_by_role: Mapped[str] = mapped_column(String(20))
    assigned_manager: Mapped[str | None] = mapped_column(String(36), nullable=True, index=True)
    partner_id: Mapped[str | None] = mapped_column(String(36), nullable=True, index=True)
    document_checklist_complete: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), onupdate=func.now())

    documents: Mapped[list["ApplicationDocument"]] = relationship(
        back_populates="application", cascade="all, delete-orphan",
    )
    history: Mapped[list["ApplicationStatusHistory"]] = relationship(
        back_populates="application", cascade="all, delete-orphan",
        order_by="ApplicationStatusHistory.id",
    )

    def is_owned_by(self, user_id: str) -> bool:
        """Creator, assigned manager and referring partner all count as owners."""
        return user_id in {self.created_by, self.assigned_manager, self.partner_id}

    def has_required_documents(self) -> bool:
        """True once every mandatory document is uploaded or the checklist is signed off."""
        if self.document_checklist_complete:
            return True
        mandatory = [d for d in self.documents if d.is_mandatory]
        return bool(mandatory) and all(d.is_uploaded for d in mandatory)


class ApplicationDocument(Base):
    __tablename__ = "application_documents"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    application_id: Mapped[str] = mapped_column(ForeignKey("applications.id"), index=True)
    document_name: Mapped[str] = mapped_column(String(200))
    document_category: Mapped[str] = mapped_column(String(50))
    is_mandatory: Mapped[bool] = mapped_column(Boolean, default=True)
    is_uploaded: Mapped[bool] = mapped_column(Boolean, default=False)
    file_path: Mapped[str | None] = mapped_column(String(500), nullable=True)
    uploaded_by: Mapped[str | None] = mapped_column(String(36), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), onupdate=func.now())

    application: Mapped["Application"] = relationship(back_populates="documents")


class ApplicationStatusHistory(Base):
    """Append-only log of status changes; rows are never updated."""

    __tablename__ = "application_status_history"

    id: Mapped[int] = mapped_column(primary_key=True)
    application_id: Mapped[str] = mapped_column(ForeignKey("applications.id"), index=True)
    previous_status: Mapped[str | None] = mapped_column(String(20), nullable=True)
    new_status: Mapped[str] = mapped_column(String(20))
    changed_by: Mapped[str] = mapped_column(String(36))
    changed_by_role: Mapped[str] = mapped_column(String(20))
    comment: Mapped[str | None] = mapped_column(String(2000), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), index=True)

    application: Mapped["Application"] = relationship(back_populates="history")
