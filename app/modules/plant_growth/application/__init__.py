# 📄 File: app/modules/plant_growth/application/__init__.py
# 🧭 Purpose (Layman Explanation):
# The coordinators that take a request (plant a seed, record an entry, check health)
# and make the garden rules, the database and the announcements work together.
# 🧪 Purpose (Technical Summary):
# Application layer: CQRS commands, queries, DTOs and their handlers.
# 🔄 Connected Modules / Calls From:
# Presentation layer, background jobs
