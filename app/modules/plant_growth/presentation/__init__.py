# 📄 File: app/modules/plant_growth/presentation/__init__.py
# 🧭 Purpose (Layman Explanation):
# The front door of the plant module: the web endpoints the app talks to.
# 🧪 Purpose (Technical Summary):
# Presentation layer package (FastAPI routers, request schemas, dependency wiring).
# 🔗 Dependencies:
# FastAPI, plant growth application layer
# 🔄 Connected Modules / Calls From:
# app.api.v1.router
