"""Project and developer lookups."""
from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.models.developer import Developer
from app.models.project import Project


def find_project_by_id(db: Session, project_id: UUID) -> Optional[Project]:
    """Return the project with the given ID, or None."""
    return db.get(Project, project_id)


def find_developer_by_username(db: Session, username: str) -> Optional[Developer]:
    """Return the developer with the given username, or None."""
    return db.query(Developer).filter(Developer.username == username).first()
