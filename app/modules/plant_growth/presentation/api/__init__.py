# 📄 File: app/modules/plant_growth/presentation/api/__init__.py
# 🧭 Purpose (Layman Explanation):
# Groups the plant web endpoints and the shapes of the data they accept.
# 🧪 Purpose (Technical Summary):
# API package for the plant growth module.
# 🔗 Dependencies:
# presentation.api.v1, presentation.api.schemas
# 🔄 Connected Modules / Calls From:
# app.api.v1.router
