# 📄 File: app/background_jobs/__init__.py
# 🧭 Purpose (Layman Explanation):
# Home of the jobs that run on a timer in the background, like walking through the
# garden to see which plants have been left unwatered.
# 🧪 Purpose (Technical Summary):
# Celery background job package; tasks live in app.background_jobs.tasks and are
# discovered by celery_config.
# 🔗 Dependencies:
# celery
# 🔄 Connected Modules / Calls From:
# celery_config (autodiscovery, beat schedule)
