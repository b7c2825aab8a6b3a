"""
Student API endpoints.
Admin-only student record management.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List

from schoolbank.core.config import settings
from schoolbank.core.session import require_admin
from schoolbank.database import get_db
from schoolbank.models.account import Account
from schoolbank.models.student import Student
from schoolbank.schemas.student import StudentCreate, StudentResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/students", tags=["Students"], dependencies=[Depends(require_admin)])


def get_student_or_404(db: Session, student_id: int) -> Student:
    student = db.query(Student).filter(Student.id == student_id).first()
    if not student:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Student {student_id} not found"
        )
    return student


@router.post("/", response_model=StudentResponse, status_code=status.HTTP_201_CREATED)
def create_student(
    student_data: StudentCreate,
    db: Session = Depends(get_db)
):
    """
    Register a student in the banking program.
    """
    student = Student(**student_data.model_dump())
    db.add(student)
    db.commit()
    db.refresh(student)

    logger.info("Created student %s (%s)", student.id, student.name)
    return student


@router.get("/", response_model=List[StudentResponse])
def list_students(
    skip: int = 0,
    limit: int = settings.DEFAULT_PAGE_LIMIT,
    db: Session = Depends(get_db)
):
    """
    List students with pagination.
    """
    return db.query(Student).order_by(Student.id).offset(skip).limit(limit).all()


@router.get("/{student_id}", response_model=StudentResponse)
def get_student(
    student_id: int,
    db: Session = Depends(get_db)
):
    return get_student_or_404(db, student_id)


@router.put("/{student_id}", response_model=StudentResponse)
def update_student(
    student_id: int,
    student_data: StudentCreate,
    db: Session = Depends(get_db)
):
    """
    Replace a student's details.
    """
    student = get_student_or_404(db, student_id)
    for field, value in student_data.model_dump().items():
        setattr(student, field, value)
    db.commit()
    db.refresh(student)

    logger.info("Updated student %s", student_id)
    return student


@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_student(
    student_id: int,
    db: Session = Depends(get_db)
):
    """
    Delete a student.

    Accounts referencing the student are kept and become orphaned.
    """
    student = get_student_or_404(db, student_id)
    orphaned = [
        account.account_number
        for account in db.query(Account).filter(Account.student_id == student_id).all()
    ]

    db.delete(student)
    db.commit()

    if orphaned:
        logger.warning("Deleted student %s; accounts left without a student: %s", student_id, orphaned)
    else:
        logger.info("Deleted student %s", student_id)
    return None
