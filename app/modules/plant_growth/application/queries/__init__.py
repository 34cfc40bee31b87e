from .get_plant import GetPlantQuery

__all__ = ["GetPlantQuery"]
