"""
session_auth package

Authentication backend for signup, signin and signout. It includes:

- FastAPI application (`auth_service/main.py`)
- SQLAlchemy models, database integration and the user repository
- Password hashing and JWT logic (`auth_service/auth.py`)
- Session cookie helpers and the rate/bot guard
"""
