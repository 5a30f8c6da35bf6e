"""
Idea Diary: local-only personal idea journal.

- Zero-friction capture of ideas and free-form cause/effect logs
- Action plans, outcomes and an executed/open state per idea
- Durable local storage that heals itself on corruption
- Portable JSON backups
"""

__version__ = "0.1.0"
