"""
Static reference data: demo flights, served cities and the airline and
hub lists used by the generated flight source.
"""

from typing import Dict, List, Tuple

from src.flight_booking.schemas.flight import City, Flight

PUBLIC_FLIGHTS: Tuple[Flight, ...] = (
    Flight(
        id="1",
        destination="Mumbai",
        price=5500,
        airline="Air India",
        airline_code="AI",
        airline_logo="air-india-logo.png",
        flight_number="AI202",
        departure_airport="DEL",
        arrival_airport="BOM",
        departure_time="08:00",
        arrival_time="10:15",
        departure_date="2023-12-01",
        duration="2h 15m",
        duration_minutes=135,
        stops=0,
    ),
    Flight(
        id="2",
        destination="Bengaluru",
        price=6200,
        airline="IndiGo",
        airline_code="6E",
        airline_logo="indigo-logo.png",
        flight_number="6E345",
        departure_airport="DEL",
        arrival_airport="BLR",
        departure_time="19:00",
        arrival_time="21:45",
        departure_date="2023-12-15",
        duration="2h 45m",
        duration_minutes=165,
        stops=0,
    ),
    Flight(
        id="3",
        destination="Chennai",
        price=7800,
        airline="Vistara",
        airline_code="UK",
        airline_logo="vistara-logo.png",
        flight_number="UK789",
        departure_airport="DEL",
        arrival_airport="MAA",
        departure_time="13:45",
        arrival_time="16:30",
        departure_date="2023-12-20",
        duration="2h 45m",
        duration_minutes=165,
        stops=1,
        stop_locations=("HYD",),
    ),
)

CITIES: Tuple[City, ...] = (
    City("DEL", "New Delhi", "Indira Gandhi International Airport"),
    City("BOM", "Mumbai", "Chhatrapati Shivaji Maharaj International Airport"),
    City("MAA", "Chennai", "Chennai International Airport"),
    City("BLR", "Bengaluru", "Kempegowda International Airport"),
    City("CCU", "Kolkata", "Netaji Subhas Chandra Bose International Airport"),
    City("HYD", "Hyderabad", "Rajiv Gandhi International Airport"),
    City("COK", "Kochi", "Cochin International Airport"),
    City("GOI", "Goa", "Dabolim Airport"),
    City("JAI", "Jaipur", "Jaipur International Airport"),
    City("AMD", "Ahmedabad", "Sardar Vallabhbhai Patel International Airport"),
)

# Generated flights: airline name -> logo
AIRLINES: List[Dict[str, str]] = [
    {"name": "Delta", "logo": "https://placehold.co/30x30?text=DL"},
    {"name": "United", "logo": "https://placehold.co/30x30?text=UA"},
    {"name": "American", "logo": "https://placehold.co/30x30?text=AA"},
    {"name": "Spirit", "logo": "https://placehold.co/30x30?text=NK"},
    {"name": "JetBlue", "logo": "https://placehold.co/30x30?text=B6"},
]

STOP_LOCATIONS: Tuple[str, ...] = (
    "ATL",
    "ORD",
    "DFW",
    "DEN",
    "LAX",
    "JFK",
    "MIA",
    "SFO",
    "CLT",
    "LAS",
)
