from .models import PlantStateModel
from .plant_repository_impl import PlantRepositoryImpl

__all__ = ["PlantStateModel", "PlantRepositoryImpl"]
