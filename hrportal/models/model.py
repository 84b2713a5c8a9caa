# hrportal/models/model.py
import uuid

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import declarative_base, relationship

from hrportal.core.utils import today

Base = declarative_base()


def generate_uuid() -> str:
    return str(uuid.uuid4())


class TimestampMixin:
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class User(TimestampMixin, Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    email = Column(String(255), nullable=False, unique=True, index=True)
    hashed_password = Column(String(255), nullable=False)
    full_name = Column(String(200), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}')>"


class Employee(TimestampMixin, Base):
    __tablename__ = "employees"
    __table_args__ = (UniqueConstraint("user_id", "email", name="uq_employees_user_email"),)

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=False)
    position = Column(String(100), nullable=False)
    department = Column(String(100), nullable=False, index=True)
    hire_date = Column(Date, nullable=False)
    salary = Column(Integer, nullable=False, default=0)
    address = Column(String(255), nullable=False, default="")
    education_degree = Column(String(100), nullable=True)
    branch = Column(String(100), nullable=True)
    skills = Column(Text, nullable=True)
    emergency_contact_name = Column(String(100), nullable=False, default="")
    emergency_contact_phone = Column(String(50), nullable=False, default="")
    emergency_contact_relationship = Column(String(50), nullable=False, default="")
    status = Column(String(20), nullable=False, default="active", index=True)

    def __repr__(self):
        return f"<Employee(id={self.id}, name='{self.first_name} {self.last_name}')>"


class AttendanceRecord(TimestampMixin, Base):
    __tablename__ = "attendance_records"
    __table_args__ = (
        UniqueConstraint("user_id", "employee_id", "date", name="uq_attendance_employee_date"),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    employee_id = Column(String(36), ForeignKey("employees.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    check_in = Column(String(5), nullable=True)
    check_out = Column(String(5), nullable=True)
    status = Column(String(20), nullable=False, default="present")
    work_location = Column(String(3), nullable=False, default="WFO")
    notes = Column(Text, nullable=True)

    employee = relationship("Employee", lazy="joined")

    def __repr__(self):
        return f"<AttendanceRecord(id={self.id}, employee_id={self.employee_id}, date={self.date})>"


class LeaveRequest(TimestampMixin, Base):
    __tablename__ = "leaves"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    employee_id = Column(String(36), ForeignKey("employees.id", ondelete="CASCADE"), nullable=False, index=True)
    leave_type = Column(String(20), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    reason = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default="pending", index=True)
    approved_by = Column(String(255), nullable=True)
    approved_at = Column(DateTime, nullable=True)

    employee = relationship("Employee", lazy="joined")

    def __repr__(self):
        return f"<LeaveRequest(id={self.id}, status='{self.status}')>"


class Holiday(TimestampMixin, Base):
    __tablename__ = "holidays"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(150), nullable=False)
    date = Column(Date, nullable=False, index=True)
    description = Column(Text, nullable=True)
    is_recurring = Column(Boolean, nullable=False, default=False)

    def __repr__(self):
        return f"<Holiday(id={self.id}, name='{self.name}', date={self.date})>"


class WorkLog(TimestampMixin, Base):
    __tablename__ = "work_logs"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    employee_id = Column(String(36), ForeignKey("employees.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    task = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    hours_spent = Column(Float, nullable=False, default=0)
    priority = Column(String(10), nullable=False, default="medium")
    status = Column(String(20), nullable=False, default="in-progress")

    employee = relationship("Employee", lazy="joined")

    def __repr__(self):
        return f"<WorkLog(id={self.id}, task='{self.task}')>"


class Notification(TimestampMixin, Base):
    __tablename__ = "notifications"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    notification_date = Column(Date, nullable=False, default=today)
    is_active = Column(Boolean, nullable=False, default=True)

    def __repr__(self):
        return f"<Notification(id={self.id}, title='{self.title}')>"


class Project(TimestampMixin, Base):
    __tablename__ = "projects"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    employee_id = Column(String(36), ForeignKey("employees.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    category = Column(String(100), nullable=False)
    tag = Column(String(50), nullable=False)
    file_paths = Column(JSON, nullable=True)

    employee = relationship("Employee", lazy="joined")

    def __repr__(self):
        return f"<Project(id={self.id}, title='{self.title}')>"


class UserSettings(TimestampMixin, Base):
    __tablename__ = "user_settings"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)
    company_name = Column(String(200), nullable=True)
    company_email = Column(String(255), nullable=True)
    company_address = Column(String(255), nullable=True)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    email = Column(String(255), nullable=True)
    role = Column(String(100), nullable=True, default="HR Manager")
    email_notifications = Column(Boolean, nullable=True, default=True)
    attendance_alerts = Column(Boolean, nullable=True, default=True)
    task_reminders = Column(Boolean, nullable=True, default=False)
    weekly_reports = Column(Boolean, nullable=True, default=True)
    dark_mode = Column(Boolean, nullable=True, default=False)
    theme_color = Column(String(20), nullable=True, default="blue")

    def __repr__(self):
        return f"<UserSettings(user_id={self.user_id})>"
