"""Game domain services: win detection, match rules and celebrations.

This package contains pure domain logic that is driven by the connection
dispatcher, keeping transport concerns separated from core game mechanics.
"""
