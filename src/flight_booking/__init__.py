"""
Flight Booking - flight search, booking and user management.

The design-critical part lives in ``services``: a pure filter/sort engine
that reconciles several frontend filter formats into one canonical filter.
"""
