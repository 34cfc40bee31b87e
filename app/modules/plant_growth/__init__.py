# 📄 File: app/modules/plant_growth/__init__.py
# 🧭 Purpose (Layman Explanation):
# The garden itself: everything that makes a user's plant grow, bloom, bear fruit or wilt
# in response to their journaling.
# 🧪 Purpose (Technical Summary):
# Plant growth bounded context laid out in domain, application, infrastructure and
# presentation layers.
# 🔄 Connected Modules / Calls From:
# app.api.v1.router, app.background_jobs, app.main
