from .plant_dto import EncouragementDTO, PlantStateDTO, RewardDTO, SpecialEffectDTO

__all__ = ["EncouragementDTO", "PlantStateDTO", "RewardDTO", "SpecialEffectDTO"]
