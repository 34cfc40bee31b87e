# 📄 File: app/modules/plant_growth/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# Describes how each user's plant is laid out in the database table, one row per user.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM model for the plant_states table. Rewards are stored as JSON arrays and
# ``version`` backs the optimistic compare-and-swap used by the repository.
#
# 🔗 Dependencies:
# - SQLAlchemy ORM
# - app.shared.infrastructure.database.connection (declarative base)
#
# 🔄 Connected Modules / Calls From:
# - plant_repository_impl.py (CRUD operations)
# - migrations/versions/001_plant_states.py (schema)

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Integer,
    JSON,
    String,
    func,
)

from app.shared.infrastructure.database.connection import Base


class PlantStateModel(Base):
    """
    SQLAlchemy model for a user's plant growth state.

    One row per user; ``user_id`` comes from the external identity layer.
    """
    __tablename__ = "plant_states"
    __table_args__ = (
        CheckConstraint("health >= 0 AND health <= 100", name="health_range"),
        CheckConstraint("longest_streak >= current_streak", name="longest_streak_floor"),
        CheckConstraint(
            "stage IN ('seed', 'sprout', 'plant', 'blooming', 'tree', 'fruiting_tree')",
            name="stage_values",
        ),
    )

    user_id = Column(String(128), primary_key=True, comment="External user identifier")
    timezone = Column(String(64), nullable=False, default="UTC", comment="IANA zone for day boundaries")

    stage = Column(String(32), nullable=False, default="seed")
    health = Column(Integer, nullable=False, default=100)

    last_entry_at = Column(DateTime(timezone=True), nullable=True, index=True)
    days_since_last_entry = Column(Integer, nullable=False, default=0)
    last_decay_days = Column(
        Integer,
        nullable=False,
        default=0,
        comment="Idle day count already penalised since the last entry"
    )

    total_entries = Column(Integer, nullable=False, default=0)
    growth_points = Column(Integer, nullable=False, default=0)
    current_streak = Column(Integer, nullable=False, default=0)
    longest_streak = Column(Integer, nullable=False, default=0)

    flowers = Column(JSON, nullable=False, default=list)
    fruits = Column(JSON, nullable=False, default=list)
    special_effects = Column(JSON, nullable=False, default=list)
    wilting_started = Column(Boolean, nullable=False, default=False)

    version = Column(Integer, nullable=False, default=1, comment="Optimistic concurrency counter")
    created_at = Column(DateTime(timezone=True), nullable=False, default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, default=func.now())
    last_health_check_at = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<PlantStateModel(user_id={self.user_id}, stage={self.stage}, version={self.version})>"
