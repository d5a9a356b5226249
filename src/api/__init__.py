"""
HTTP API for Flight Booking (FastAPI).
"""
