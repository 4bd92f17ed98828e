"""
auth: User authentication module.

Provides:
  • Signed bearer token creation & verification (``TokenService``)
  • Password hashing (bcrypt, work factor 10)
  • Login / Logout API routes
  • ``get_current_user`` FastAPI dependency
"""
