# 📄 File: app/modules/plant_growth/infrastructure/database/plant_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Saves and loads plants from the database, and refuses to overwrite a plant that someone
# else changed in the meantime so no journal entry or health check is ever lost.
#
# 🧪 Purpose (Technical Summary):
# Concrete PlantRepository on SQLAlchemy async sessions. ``save`` is a single
# UPDATE ... WHERE user_id = ? AND version = ? committed on success; zero affected rows
# means the compare-and-swap lost and ConcurrencyConflictError is raised.
#
# 🔗 Dependencies:
# - app.modules.plant_growth.domain.repositories.plant_repository (interface)
# - app.modules.plant_growth.domain.models.plant (domain model)
# - app.modules.plant_growth.infrastructure.database.models (SQLAlchemy model)
# - SQLAlchemy async session and query operations
#
# 🔄 Connected Modules / Calls From:
# - app.modules.plant_growth.presentation.dependencies (per-request repository)
# - app.background_jobs.tasks.plant_health (health sweep)

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.plant_growth.domain.models.plant import (
    Flower,
    Fruit,
    PlantStage,
    PlantState,
    SpecialEffect,
)
from app.modules.plant_growth.domain.repositories.plant_repository import PlantRepository
from app.modules.plant_growth.infrastructure.database.models import PlantStateModel
from app.shared.core.clock import ensure_aware
from app.shared.core.exceptions import (
    ConcurrencyConflictError,
    DuplicateResourceError,
    PlantNotFoundError,
    RepositoryError,
)

logger = logging.getLogger(__name__)


class PlantRepositoryImpl(PlantRepository):
    """
    SQLAlchemy implementation of the PlantRepository interface.

    Every write commits its own transaction, so a plant is replaced
    as one unit or not at all.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_user_id(self, user_id: str) -> Optional[PlantState]:
        try:
            stmt = (
                select(PlantStateModel)
                .where(PlantStateModel.user_id == user_id)
                .execution_options(populate_existing=True)
            )
            result = await self._session.execute(stmt)
            model = result.scalar_one_or_none()

            if model is None:
                logger.debug(f"Plant not found: {user_id}")
                return None

            return self._model_to_domain(model)

        except SQLAlchemyError as e:
            logger.error(f"Database error retrieving plant {user_id}: {str(e)}")
            raise RepositoryError(
                f"Failed to retrieve plant: {str(e)}",
                operation="get_by_user_id",
                entity="plant",
            ) from e

    async def exists(self, user_id: str) -> bool:
        try:
            stmt = select(func.count()).select_from(PlantStateModel).where(PlantStateModel.user_id == user_id)
            result = await self._session.execute(stmt)
            return (result.scalar() or 0) > 0
        except SQLAlchemyError as e:
            logger.error(f"Database error checking plant {user_id}: {str(e)}")
            raise RepositoryError(f"Failed to check plant: {str(e)}", operation="exists", entity="plant") from e

    async def create(self, state: PlantState) -> PlantState:
        stored = state.model_copy(update={"version": 1})
        try:
            self._session.add(self._domain_to_model(stored))
            await self._session.flush()
            await self._session.commit()

            logger.info(f"Created plant for user: {state.user_id}")
            return stored

        except IntegrityError as e:
            await self._session.rollback()
            logger.warning(f"Plant creation failed - already exists: {state.user_id}")
            raise DuplicateResourceError(
                message=f"Plant already exists for user: {state.user_id}",
                resource_type="plant",
                field="user_id",
                value=state.user_id,
            ) from e

        except SQLAlchemyError as e:
            await self._session.rollback()
            logger.error(f"Database error during plant creation: {str(e)}")
            raise RepositoryError(f"Failed to create plant: {str(e)}", operation="create", entity="plant") from e

    async def save(self, state: PlantState, expected_version: int) -> PlantState:
        new_version = expected_version + 1
        try:
            stmt = (
                update(PlantStateModel)
                .where(
                    PlantStateModel.user_id == state.user_id,
                    PlantStateModel.version == expected_version,
                )
                .values(version=new_version, **self._mutable_columns(state))
                .execution_options(synchronize_session=False)
            )
            result = await self._session.execute(stmt)

            if result.rowcount == 0:
                await self._session.rollback()
                if not await self.exists(state.user_id):
                    raise PlantNotFoundError(state.user_id)
                logger.info(f"Version conflict on plant {state.user_id} (expected {expected_version})")
                raise ConcurrencyConflictError(state.user_id, expected_version)

            await self._session.commit()
            logger.debug(f"Saved plant {state.user_id} at version {new_version}")
            return state.model_copy(update={"version": new_version})

        except SQLAlchemyError as e:
            await self._session.rollback()
            logger.error(f"Database error saving plant {state.user_id}: {str(e)}")
            raise RepositoryError(f"Failed to save plant: {str(e)}", operation="save", entity="plant") from e

    async def list_user_ids_with_entries(self, limit: int, after_user_id: Optional[str] = None) -> List[str]:
        try:
            stmt = (
                select(PlantStateModel.user_id)
                .where(PlantStateModel.last_entry_at.is_not(None))
                .order_by(PlantStateModel.user_id)
                .limit(limit)
            )
            if after_user_id is not None:
                stmt = stmt.where(PlantStateModel.user_id > after_user_id)
            result = await self._session.execute(stmt)
            return list(result.scalars().all())

        except SQLAlchemyError as e:
            logger.error(f"Database error listing plants: {str(e)}")
            raise RepositoryError(
                f"Failed to list plants: {str(e)}",
                operation="list_user_ids_with_entries",
                entity="plant",
            ) from e

    # =========================================================================
    # MAPPING
    # =========================================================================

    def _mutable_columns(self, state: PlantState) -> Dict[str, Any]:
        return {
            "timezone": state.timezone,
            "stage": state.stage.value,
            "health": state.health,
            "last_entry_at": _as_utc(state.last_entry_at),
            "days_since_last_entry": state.days_since_last_entry,
            "last_decay_days": state.last_decay_days,
            "total_entries": state.total_entries,
            "growth_points": state.growth_points,
            "current_streak": state.current_streak,
            "longest_streak": state.longest_streak,
            "flowers": [f.model_dump(mode="json") for f in state.flowers],
            "fruits": [f.model_dump(mode="json") for f in state.fruits],
            "special_effects": [e.model_dump(mode="json") for e in state.special_effects],
            "wilting_started": state.wilting_started,
            "updated_at": _as_utc(state.updated_at),
            "last_health_check_at": _as_utc(state.last_health_check_at),
        }

    def _domain_to_model(self, state: PlantState) -> PlantStateModel:
        return PlantStateModel(
            user_id=state.user_id,
            version=state.version,
            created_at=_as_utc(state.created_at),
            **self._mutable_columns(state),
        )

    def _model_to_domain(self, model: PlantStateModel) -> PlantState:
        return PlantState(
            user_id=model.user_id,
            timezone=model.timezone,
            stage=PlantStage(model.stage),
            health=model.health,
            last_entry_at=_as_utc(model.last_entry_at),
            days_since_last_entry=model.days_since_last_entry,
            last_decay_days=model.last_decay_days,
            total_entries=model.total_entries,
            growth_points=model.growth_points,
            current_streak=model.current_streak,
            longest_streak=model.longest_streak,
            flowers=[Flower.model_validate(f) for f in model.flowers or []],
            fruits=[Fruit.model_validate(f) for f in model.fruits or []],
            special_effects=[SpecialEffect.model_validate(e) for e in model.special_effects or []],
            wilting_started=model.wilting_started,
            version=model.version,
            created_at=_as_utc(model.created_at),
            updated_at=_as_utc(model.updated_at),
            last_health_check_at=_as_utc(model.last_health_check_at),
        )


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands back naive values; they were written as UTC
    if value is None:
        return None
    return ensure_aware(value).astimezone(timezone.utc)
