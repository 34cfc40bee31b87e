# 📄 File: app/modules/plant_growth/domain/__init__.py
# 🧭 Purpose (Layman Explanation):
# The rules of the garden - how streaks are counted, when a plant grows, what prizes it earns
# and how it wilts - with no knowledge of databases or web requests.
# 🧪 Purpose (Technical Summary):
# Domain layer: PlantState aggregate, pure domain services, repository interface and events.
# 🔄 Connected Modules / Calls From:
# Application layer, Infrastructure layer, tests

"""
Plant Growth Domain Layer

Domain Models:
- PlantState: per-user growth aggregate
- Flower, Fruit, SpecialEffect: reward value objects

Domain Services:
- Streak calculator, stage resolver, reward generator, health model
- PlantStateMachine: orchestrates the engine transitions

Repository Interfaces:
- PlantRepository: compare-and-swap persistence contract
"""
