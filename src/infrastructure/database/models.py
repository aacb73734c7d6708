"""SQLAlchemy ORM models."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class AssignmentModel(Base):
    """Assignment configuration (owned by the course management side)."""

    __tablename__ = "assignments"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    course_id: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    title: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    group_assignment: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    max_group_size: Mapped[int | None] = mapped_column(Integer)
    enable_peer_responses: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    response_due_date: Mapped[datetime | None] = mapped_column(DateTime)
    response_word_limit: Mapped[int | None] = mapped_column(Integer)
    response_character_limit: Mapped[int | None] = mapped_column(Integer)
    min_responses_required: Mapped[int | None] = mapped_column(Integer)
    max_responses_per_video: Mapped[int | None] = mapped_column(Integer)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )


class GroupModel(Base):
    """Assignment group model."""

    __tablename__ = "groups"
    __table_args__ = (
        CheckConstraint("current_size <= max_size", name="ck_groups_capacity"),
        CheckConstraint(
            "status IN ('forming', 'ready', 'submitted')",
            name="ck_groups_status",
        ),
    )

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    assignment_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("assignments.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    join_code: Mapped[str] = mapped_column(
        String(6), nullable=False, unique=True, index=True
    )
    group_name: Mapped[str] = mapped_column(String(100), nullable=False)
    leader_id: Mapped[str] = mapped_column(String(64), nullable=False)
    leader_name: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    max_size: Mapped[int] = mapped_column(Integer, nullable=False)
    current_size: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="forming")
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    # Relationships
    assignment: Mapped["AssignmentModel"] = relationship("AssignmentModel")
    members: Mapped[list["GroupMemberModel"]] = relationship(
        "GroupMemberModel",
        back_populates="group",
        cascade="all, delete-orphan",
        order_by="GroupMemberModel.position",
    )


class GroupMemberModel(Base):
    """Group membership model (composite PK on group_id + user_id).

    ``assignment_id`` is copied from the group so the database can enforce
    one group per student per assignment.
    """

    __tablename__ = "group_members"
    __table_args__ = (
        UniqueConstraint(
            "assignment_id", "user_id", name="uq_group_members_assignment_user"
        ),
    )

    group_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("groups.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    assignment_id: Mapped[str] = mapped_column(String(64), nullable=False)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    last_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    role: Mapped[str] = mapped_column(
        String(20),
        CheckConstraint(
            "role IN ('leader', 'member')",
            name="ck_group_members_role",
        ),
        nullable=False,
        default="member",
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    joined_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    group: Mapped["GroupModel"] = relationship("GroupModel", back_populates="members")


class PeerResponseModel(Base):
    """Peer response written by a student about a classmate's video."""

    __tablename__ = "peer_responses"
    __table_args__ = (
        Index("ix_peer_responses_assignment_student", "assignment_id", "student_id"),
    )

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    assignment_id: Mapped[str] = mapped_column(String(64), nullable=False)
    video_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    student_id: Mapped[str] = mapped_column(String(64), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
