"""JoHotel reservation admission engine."""
