# hrportal/schemas/schema.py
import datetime as dt
from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

from hrportal.core.utils import calculate_hours, format_hours, parse_time, today

EmployeeStatus = Literal["active", "inactive"]
AttendanceStatus = Literal["present", "absent", "late", "half-day"]
WorkLocation = Literal["WFO", "WFH"]
LeaveType = Literal["annual", "sick", "casual", "maternity", "paternity", "unpaid"]
LeaveStatus = Literal["pending", "approved", "rejected"]
Priority = Literal["low", "medium", "high"]
WorkLogStatus = Literal["in-progress", "completed", "on-hold"]


def _check_time(value: Optional[str]) -> Optional[str]:
    if value in (None, ""):
        return None
    parse_time(value)
    return value


def _employee_name(row) -> Optional[str]:
    employee = getattr(row, "employee", None)
    if employee is None:
        return None
    return f"{employee.first_name} {employee.last_name}"


class ResponseMessage(BaseModel):
    """Schema for response messages"""
    message: str = Field(..., description="Response message")


# ---------------------------------------------------------------- auth


class PasswordConfirmation(BaseModel):
    password: str = Field(..., description="New password", min_length=6)
    confirm_password: str = Field(..., description="Repeat of the new password")

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class SignUpRequest(PasswordConfirmation):
    """Schema for account sign up"""
    email: EmailStr = Field(..., description="Account email", examples=["hr@example.com"])
    full_name: Optional[str] = Field(None, description="Display name", examples=["Jane Doe"])


class SignInRequest(BaseModel):
    """Schema for JSON sign in"""
    email: EmailStr = Field(..., description="Account email")
    password: str = Field(..., description="Account password")


class ForgotPasswordRequest(BaseModel):
    email: EmailStr = Field(..., description="Account email")


class ResetPasswordRequest(PasswordConfirmation):
    token: str = Field(..., description="Reset token from the reset link")


class UpdatePasswordRequest(PasswordConfirmation):
    current_password: str = Field(..., description="Current password")


class UserResponse(BaseModel):
    """Schema for the signed in account"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: EmailStr
    full_name: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None


# ---------------------------------------------------------------- employees


class EmergencyContact(BaseModel):
    name: str = Field("", description="Contact name")
    phone: str = Field("", description="Contact phone")
    relationship: str = Field("", description="Relationship to the employee")


class EmployeeBase(BaseModel):
    """Base schema for employee data"""
    first_name: str = Field(..., description="First name", examples=["John"], min_length=1)
    last_name: str = Field(..., description="Last name", examples=["Doe"], min_length=1)
    email: EmailStr = Field(..., description="Employee email", examples=["john.doe@example.com"])
    phone: str = Field(..., description="Phone number", examples=["+1 555 0100"], min_length=1)
    position: str = Field(..., description="Job title", examples=["Data Engineer"], min_length=1)
    department: str = Field(..., description="Department", examples=["Engineering"], min_length=1)
    hire_date: date = Field(..., description="Date of hire", examples=["2023-01-15"])
    salary: int = Field(0, description="Salary", ge=0)
    address: str = Field("", description="Home address")
    education_degree: Optional[str] = Field(None, description="Highest degree")
    branch: Optional[str] = Field(None, description="Branch or field of study")
    skills: Optional[str] = Field(None, description="Comma separated skills")
    status: EmployeeStatus = Field("active", description="Lifecycle status")


class EmployeeCreate(EmployeeBase):
    """Schema for creating an employee"""
    emergency_contact: EmergencyContact = Field(default_factory=EmergencyContact)

    def to_row(self) -> dict:
        data = self.model_dump(exclude={"emergency_contact"})
        data.update(
            emergency_contact_name=self.emergency_contact.name,
            emergency_contact_phone=self.emergency_contact.phone,
            emergency_contact_relationship=self.emergency_contact.relationship,
        )
        return data


class EmployeeUpdate(BaseModel):
    """Schema for updating an employee"""
    first_name: Optional[str] = Field(None, min_length=1)
    last_name: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, min_length=1)
    position: Optional[str] = Field(None, min_length=1)
    department: Optional[str] = Field(None, min_length=1)
    hire_date: Optional[date] = None
    salary: Optional[int] = Field(None, ge=0)
    address: Optional[str] = None
    education_degree: Optional[str] = None
    branch: Optional[str] = None
    skills: Optional[str] = None
    status: Optional[EmployeeStatus] = None
    emergency_contact: Optional[EmergencyContact] = None

    def to_row(self) -> dict:
        data = self.model_dump(exclude_unset=True, exclude_none=True, exclude={"emergency_contact"})
        if self.emergency_contact is not None:
            data.update(
                emergency_contact_name=self.emergency_contact.name,
                emergency_contact_phone=self.emergency_contact.phone,
                emergency_contact_relationship=self.emergency_contact.relationship,
            )
        return data


class EmployeeResponse(EmployeeBase):
    """Schema for employee response"""
    id: str
    full_name: str
    emergency_contact: EmergencyContact
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, employee) -> "EmployeeResponse":
        return cls(
            id=employee.id,
            first_name=employee.first_name,
            last_name=employee.last_name,
            full_name=f"{employee.first_name} {employee.last_name}",
            email=employee.email,
            phone=employee.phone,
            position=employee.position,
            department=employee.department,
            hire_date=employee.hire_date,
            salary=employee.salary,
            address=employee.address,
            education_degree=employee.education_degree,
            branch=employee.branch,
            skills=employee.skills,
            status=employee.status,
            emergency_contact=EmergencyContact(
                name=employee.emergency_contact_name,
                phone=employee.emergency_contact_phone,
                relationship=employee.emergency_contact_relationship,
            ),
            created_at=employee.created_at,
            updated_at=employee.updated_at,
        )


class EmployeeCount(BaseModel):
    """Schema for employee count by group"""
    department: str = Field(..., description="Department name")
    count: int = Field(..., description="Number of employees")


# ---------------------------------------------------------------- attendance


class AttendanceCreate(BaseModel):
    """Schema for a manually entered attendance record"""
    employee_id: str
    date: date
    check_in: Optional[str] = Field(None, description="Check-in time", examples=["09:00"])
    check_out: Optional[str] = Field(None, description="Check-out time", examples=["17:30"])
    status: AttendanceStatus = "present"
    work_location: WorkLocation = "WFO"
    notes: Optional[str] = None

    validate_times = field_validator("check_in", "check_out")(_check_time)


class AttendanceUpdate(BaseModel):
    date: Optional[dt.date] = None
    check_in: Optional[str] = None
    check_out: Optional[str] = None
    status: Optional[AttendanceStatus] = None
    work_location: Optional[WorkLocation] = None
    notes: Optional[str] = None

    validate_times = field_validator("check_in", "check_out")(_check_time)


class CheckInRequest(BaseModel):
    employee_id: str
    work_location: WorkLocation = "WFO"
    notes: Optional[str] = None


class AttendanceResponse(BaseModel):
    id: str
    employee_id: str
    employee_name: Optional[str] = None
    date: date
    check_in: Optional[str] = None
    check_out: Optional[str] = None
    status: str
    work_location: str
    notes: Optional[str] = None
    total_hours: Optional[float] = None
    total_hours_display: str = "--"

    @classmethod
    def from_model(cls, record) -> "AttendanceResponse":
        hours = calculate_hours(record.check_in, record.check_out)
        return cls(
            id=record.id,
            employee_id=record.employee_id,
            employee_name=_employee_name(record),
            date=record.date,
            check_in=record.check_in,
            check_out=record.check_out,
            status=record.status,
            work_location=record.work_location,
            notes=record.notes,
            total_hours=hours,
            total_hours_display=format_hours(record.check_in, record.check_out),
        )


class AttendanceSummary(BaseModel):
    date: date
    total_employees: int
    checked_in: int
    checked_out: int
    present: int
    late: int
    absent: int
    half_day: int
    wfo: int
    wfh: int
    records: List[AttendanceResponse]


# ---------------------------------------------------------------- leaves


class LeaveCreate(BaseModel):
    """Schema for a leave request"""
    employee_id: str
    leave_type: LeaveType
    start_date: date
    end_date: date
    reason: str = Field(..., min_length=1)

    @model_validator(mode="after")
    def check_range(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must be on or after start_date")
        return self


class LeaveUpdate(BaseModel):
    employee_id: Optional[str] = None
    leave_type: Optional[LeaveType] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    reason: Optional[str] = Field(None, min_length=1)

    @model_validator(mode="after")
    def check_range(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must be on or after start_date")
        return self


class LeaveResponse(BaseModel):
    id: str
    employee_id: str
    employee_name: Optional[str] = None
    leave_type: str
    start_date: date
    end_date: date
    days: int = 0
    reason: str
    status: str
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, leave, days: int = 0) -> "LeaveResponse":
        return cls(
            id=leave.id,
            employee_id=leave.employee_id,
            employee_name=_employee_name(leave),
            leave_type=leave.leave_type,
            start_date=leave.start_date,
            end_date=leave.end_date,
            days=days,
            reason=leave.reason,
            status=leave.status,
            approved_by=leave.approved_by,
            approved_at=leave.approved_at,
            created_at=leave.created_at,
        )


# ---------------------------------------------------------------- holidays


class HolidayCreate(BaseModel):
    name: str = Field(..., min_length=1, examples=["New Year's Day"])
    date: date
    description: Optional[str] = None
    is_recurring: bool = False


class HolidayUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    date: Optional[dt.date] = None
    description: Optional[str] = None
    is_recurring: Optional[bool] = None


class HolidayResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    date: date
    description: Optional[str] = None
    is_recurring: bool
    occurs_on: Optional[date] = Field(None, description="Date of the holiday in the requested year")


# ---------------------------------------------------------------- work logs


class WorkLogCreate(BaseModel):
    employee_id: str
    date: dt.date = Field(default_factory=today)
    task: str = Field(..., min_length=1)
    description: Optional[str] = None
    hours_spent: float = Field(..., gt=0, le=24)
    priority: Priority = "medium"
    status: WorkLogStatus = "in-progress"


class WorkLogUpdate(BaseModel):
    employee_id: Optional[str] = None
    date: Optional[dt.date] = None
    task: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    hours_spent: Optional[float] = Field(None, gt=0, le=24)
    priority: Optional[Priority] = None
    status: Optional[WorkLogStatus] = None


class WorkLogResponse(BaseModel):
    id: str
    employee_id: str
    employee_name: Optional[str] = None
    date: date
    task: str
    description: Optional[str] = None
    hours_spent: float
    priority: str
    status: str

    @classmethod
    def from_model(cls, log) -> "WorkLogResponse":
        return cls(
            id=log.id,
            employee_id=log.employee_id,
            employee_name=_employee_name(log),
            date=log.date,
            task=log.task,
            description=log.description,
            hours_spent=log.hours_spent,
            priority=log.priority,
            status=log.status,
        )


class WorkLogSummary(BaseModel):
    total_logs: int
    total_hours: float
    completed: int
    in_progress: int
    on_hold: int
    average_hours: float


# ---------------------------------------------------------------- notifications


class NotificationCreate(BaseModel):
    title: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)
    notification_date: date = Field(default_factory=today)


class NotificationUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    message: Optional[str] = Field(None, min_length=1)
    notification_date: Optional[date] = None
    is_active: Optional[bool] = None


class NotificationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    message: str
    notification_date: date
    is_active: bool
    created_at: Optional[datetime] = None


# ---------------------------------------------------------------- projects


class ProjectFile(BaseModel):
    path: str
    name: str


class ProjectResponse(BaseModel):
    id: str
    title: str
    category: str
    tag: str
    employee_id: str
    employee_name: Optional[str] = None
    files: List[ProjectFile] = []
    failed_uploads: List[str] = []
    created_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, project, failed_uploads: Optional[List[str]] = None) -> "ProjectResponse":
        return cls(
            id=project.id,
            title=project.title,
            category=project.category,
            tag=project.tag,
            employee_id=project.employee_id,
            employee_name=_employee_name(project),
            files=[
                ProjectFile(path=path, name=path.rsplit("/", 1)[-1])
                for path in project.file_paths or []
            ],
            failed_uploads=failed_uploads or [],
            created_at=project.created_at,
        )


# ---------------------------------------------------------------- settings


class SettingsUpdate(BaseModel):
    company_name: Optional[str] = None
    company_email: Optional[EmailStr] = None
    company_address: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[EmailStr] = None
    role: Optional[str] = None
    email_notifications: Optional[bool] = None
    attendance_alerts: Optional[bool] = None
    task_reminders: Optional[bool] = None
    weekly_reports: Optional[bool] = None
    dark_mode: Optional[bool] = None
    theme_color: Optional[str] = None


class SettingsResponse(SettingsUpdate):
    model_config = ConfigDict(from_attributes=True)

    id: str
    updated_at: Optional[datetime] = None


# ---------------------------------------------------------------- dashboard


class DashboardStats(BaseModel):
    total_employees: int
    active_employees: int
    present_today: int
    attendance_rate: int
    hours_logged_today: float
    active_tasks: int
    pending_leaves: int
    upcoming_holidays: List[HolidayResponse]
    todays_attendance: List[AttendanceResponse]
    recent_work_logs: List[WorkLogResponse]
