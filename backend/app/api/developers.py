"""Developer directory endpoints."""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from app.database import get_db
from app.models import Developer
from app.repositories import directory
from app.utils.exceptions import AppException, ConflictError, handle_database_error
from app.utils.logger import logger
from app.utils.serialization import serialize_datetime

router = APIRouter(prefix="/api/developers", tags=["developers"])


class DeveloperCreate(BaseModel):
    username: str = Field(..., min_length=1, max_length=255)


class DeveloperResponse(BaseModel):
    id: str
    username: str
    created_at: Optional[str]

    @classmethod
    def from_orm(cls, obj: Developer) -> "DeveloperResponse":
        return cls(
            id=str(obj.id),
            username=obj.username,
            created_at=serialize_datetime(obj.created_at),
        )


@router.get("", response_model=list[DeveloperResponse])
async def get_developers(db: Session = Depends(get_db)) -> list[DeveloperResponse]:
    """Get all developers reports can be assigned to."""
    try:
        developers = db.query(Developer).order_by(Developer.username.asc()).all()
        return [DeveloperResponse.from_orm(d) for d in developers]
    except Exception as e:
        logger.error(f"Failed to get developers: {e}", exc_info=True)
        raise handle_database_error(e, "get_developers")


@router.post("", response_model=DeveloperResponse, status_code=status.HTTP_201_CREATED)
async def create_developer(
    developer_data: DeveloperCreate,
    db: Session = Depends(get_db),
) -> DeveloperResponse:
    """Register a developer. Usernames are unique."""
    username = developer_data.username.strip()
    try:
        if directory.find_developer_by_username(db, username):
            raise ConflictError(f"Developer '{username}' already exists")

        developer = Developer(username=username)
        db.add(developer)
        db.commit()
        db.refresh(developer)
        logger.info(f"Developer {username} registered")
        return DeveloperResponse.from_orm(developer)
    except (HTTPException, AppException):
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to create developer {username}: {e}", exc_info=True)
        raise handle_database_error(e, "create_developer")
