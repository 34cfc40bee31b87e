# 📄 File: app/modules/plant_growth/presentation/api/v1/__init__.py
# 🧭 Purpose (Layman Explanation):
# Version 1 of the plant endpoints.
# 🧪 Purpose (Technical Summary):
# Exposes the v1 plants router for inclusion in the application router.
# 🔗 Dependencies:
# presentation.api.v1.plants
# 🔄 Connected Modules / Calls From:
# app.api.v1.router

from .plants import plants_router

__all__ = ["plants_router"]
