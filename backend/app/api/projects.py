"""Projects API endpoints."""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from app.database import get_db
from app.models import Project
from app.utils.db import get_by_id
from app.utils.exceptions import AppException, handle_database_error
from app.utils.logger import logger
from app.utils.serialization import serialize_datetime

router = APIRouter(prefix="/api/projects", tags=["projects"])


class ProjectCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)


class ProjectResponse(BaseModel):
    id: str
    name: str
    created_at: Optional[str]

    @classmethod
    def from_orm(cls, obj: Project) -> "ProjectResponse":
        """Convert SQLAlchemy model to response model."""
        return cls(
            id=str(obj.id),
            name=obj.name,
            created_at=serialize_datetime(obj.created_at),
        )


@router.get("", response_model=list[ProjectResponse])
async def get_projects(db: Session = Depends(get_db)) -> list[ProjectResponse]:
    """Get all projects."""
    try:
        projects = db.query(Project).order_by(Project.name.asc()).all()
        return [ProjectResponse.from_orm(p) for p in projects]
    except Exception as e:
        logger.error(f"Failed to get projects: {e}", exc_info=True)
        raise handle_database_error(e, "get_projects")


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: str,
    db: Session = Depends(get_db),
) -> ProjectResponse:
    """
    Get a specific project.

    Args:
        project_id: The project ID
        db: Database session

    Returns:
        Project details
    """
    try:
        project = get_by_id(db, Project, project_id, "Project not found")
        return ProjectResponse.from_orm(project)
    except (HTTPException, AppException):
        raise
    except Exception as e:
        logger.error(f"Failed to get project {project_id}: {e}", exc_info=True)
        raise handle_database_error(e, "get_project")


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_project(
    project_data: ProjectCreate,
    db: Session = Depends(get_db),
) -> ProjectResponse:
    """
    Create a new monitored project.

    Args:
        project_data: Project creation data
        db: Database session

    Returns:
        Created project
    """
    try:
        project = Project(name=project_data.name.strip())
        db.add(project)
        db.commit()
        db.refresh(project)
        logger.info(f"Project {project.id} created: {project.name}")
        return ProjectResponse.from_orm(project)
    except (HTTPException, AppException):
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to create project: {e}", exc_info=True)
        raise handle_database_error(e, "create_project")
