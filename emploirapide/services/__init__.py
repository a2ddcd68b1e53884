"""
Business rules of the job board.

Each module takes an open SQLAlchemy session and raises the errors from
emploirapide.errors; the API layer turns those into HTTP responses.
"""
