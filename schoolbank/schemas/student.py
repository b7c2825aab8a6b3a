"""
Pydantic schemas for Student API requests and responses.
"""

from pydantic import BaseModel, Field, ConfigDict


class StudentCreate(BaseModel):
    """Schema for creating or replacing a student."""
    name: str = Field(..., min_length=1, max_length=100, description="Student full name")
    dob: int = Field(..., description="Date of birth as nanosecond ticks since the Unix epoch")
    student_class: str = Field(..., min_length=1, max_length=50, description="Class label")
    attendance_number: int = Field(..., ge=0, description="Attendance register number")
    school_name: str = Field(..., min_length=1, max_length=200)
    taluka: str = Field(default="", max_length=100)
    district: str = Field(default="", max_length=100)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Asha Patil",
                "dob": 1262304000000000000,
                "student_class": "5A",
                "attendance_number": 12,
                "school_name": "ZP Primary School",
                "taluka": "Haveli",
                "district": "Pune"
            }
        }
    )


class StudentResponse(BaseModel):
    """Schema for student response."""
    id: int
    name: str
    dob: int
    student_class: str
    attendance_number: int
    school_name: str
    taluka: str
    district: str

    model_config = ConfigDict(from_attributes=True)
