"""
Task subsystem.

Components:
- task_models.py: data structures (Task, Priority) and input validation
- task_store.py: in-memory ordered store + pure filtering helper
- task_file.py: JSON file gateway used to load/save the whole store
"""
