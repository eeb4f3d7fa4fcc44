"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskStatus) and their JSON form
- task_store.py: JSON-file storage (whole-file load/save)
- task_api.py: add/update/delete/mark/list operations over a store
"""
