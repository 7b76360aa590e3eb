"""FastAPI dependencies for authentication, database and services."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from src.database import get_db
from src.models.enums import RecipeSource
from src.models.recipe_ref import RecipeRef
from src.models.user import User
from src.services.activity_service import ActivityService
from src.services.auth import decode_access_token
from src.services.meal_plan_service import MealPlanService
from src.services.recipe_service import RecipeService
from src.services.spoonacular import SpoonacularService
from src.services.step_coordinator import StepCoordinator

security = HTTPBearer()


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Get the current authenticated user from JWT token."""
    token = credentials.credentials
    payload = decode_access_token(token)

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = payload.get("sub")
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = db.query(User).filter(User.id == int(user_id)).first()
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user


def get_recipe_ref(source: RecipeSource, recipe_id: int) -> RecipeRef:
    """Resolve the {source}/{recipe_id} path parameters into a recipe reference."""
    return RecipeRef(source, recipe_id)


def get_spoonacular_service() -> SpoonacularService:
    """Get external recipe API client."""
    return SpoonacularService()


def get_step_coordinator(
    db: Annotated[Session, Depends(get_db)],
    spoonacular: Annotated[SpoonacularService, Depends(get_spoonacular_service)],
) -> StepCoordinator:
    """Get step coordinator with the external step source."""
    return StepCoordinator(db, spoonacular)


def get_recipe_service(
    db: Annotated[Session, Depends(get_db)],
) -> RecipeService:
    """Get recipe service with dependencies."""
    return RecipeService(db)


def get_activity_service(
    db: Annotated[Session, Depends(get_db)],
) -> ActivityService:
    return ActivityService(db)


def get_meal_plan_service(
    db: Annotated[Session, Depends(get_db)],
) -> MealPlanService:
    return MealPlanService(db)
