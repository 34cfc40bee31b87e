# 📄 File: app/modules/plant_growth/domain/repositories/plant_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines the contract for how plants are saved and looked up, without tying the garden
# to any particular database.
# 🧪 Purpose (Technical Summary):
# Repository interface for the PlantState aggregate. Writes are compare-and-swap on the
# aggregate version so concurrent transitions for one user can never overwrite each other.
# 🔗 Dependencies:
# PlantState domain model, typing, abc
# 🔄 Connected Modules / Calls From:
# Plant growth command/query handlers, SQLAlchemy implementation, in-memory test double

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models.plant import PlantState


class PlantRepository(ABC):
    """
    Repository interface for PlantState data access operations.

    Implementation Notes:
    - Methods return domain entities (PlantState), not database models
    - ``save`` replaces the whole aggregate in one atomic write
    - Every successful write bumps ``version`` by one
    """

    @abstractmethod
    async def get_by_user_id(self, user_id: str) -> Optional[PlantState]:
        """
        Get the plant belonging to a user.

        Returns:
            PlantState if the user has been onboarded, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, state: PlantState) -> PlantState:
        """
        Store a freshly initialized plant.

        Raises:
            DuplicateResourceError: If the user already has a plant
            RepositoryError: If database operation fails
        """
        pass

    @abstractmethod
    async def save(self, state: PlantState, expected_version: int) -> PlantState:
        """
        Replace the stored plant if it is still at ``expected_version``.

        Returns:
            The stored state with its new version

        Raises:
            ConcurrencyConflictError: If the stored version moved on
            RepositoryError: If database operation fails
        """
        pass

    @abstractmethod
    async def list_user_ids_with_entries(self, limit: int, after_user_id: Optional[str] = None) -> List[str]:
        """
        Page through users whose plant has at least one entry, ordered by user id.

        Pages are keyed on ``after_user_id`` (the last id of the previous
        page), so plants created mid-sweep never shift later pages.

        Used by the periodic health sweep.
        """
        pass

    @abstractmethod
    async def exists(self, user_id: str) -> bool:
        pass
