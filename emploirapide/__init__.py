"""
EmploiRapide Backend.

Core components:
- api: FastAPI app, routers and schemas
- services: Job listings, search, applications, saved jobs, profiles
- db: SQLAlchemy tables and session management
- tools: JSearch client, file storage, PDF checks
"""
