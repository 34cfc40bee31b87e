# 📄 File: app/modules/plant_growth/infrastructure/__init__.py
# 🧭 Purpose (Layman Explanation):
# Where the garden meets the database.
# 🧪 Purpose (Technical Summary):
# Infrastructure layer: SQLAlchemy model and PlantRepository implementation.
