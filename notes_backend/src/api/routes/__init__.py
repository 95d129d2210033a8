"""
Route modules:

    health.py   GET /                      service banner and endpoint list
    auth.py     POST /api/register, POST /api/login
    notes.py    /api/notes CRUD (bearer auth)
    account.py  PUT /api/user/password, DELETE /api/user/account (bearer auth)
"""
from . import account, auth, health, notes

__all__ = ["account", "auth", "health", "notes"]
