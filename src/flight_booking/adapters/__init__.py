"""
Adapter implementations for Flight Booking.

Adapters are concrete implementations of the port interfaces.
They handle the specifics of storage, mock data and token handling.
"""
