"""
Student database model.
"""

from sqlalchemy import Column, String, BigInteger, Integer
from schoolbank.database import Base


class Student(Base):
    """
    Student table - one row per student enrolled in the banking program.
    `dob` is stored as nanosecond ticks.
    """
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    dob = Column(BigInteger, nullable=False)
    student_class = Column(String(50), nullable=False)
    attendance_number = Column(Integer, nullable=False)
    school_name = Column(String(200), nullable=False)
    taluka = Column(String(100), nullable=False, default="")
    district = Column(String(100), nullable=False, default="")

    def __repr__(self):
        return f"<Student(id={self.id}, name={self.name}, class={self.student_class})>"
