"""openpilot fork installer.

Core design goals:
- Always installable: the variant list is optional, the official repo is not
- Reuse the previous install as a fetch cache when it is known good
- Never leave a marker pointing at a half-finished install
- Centralized logging and a run record for every attempt
"""

__all__ = []
