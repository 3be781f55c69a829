"""Game domain services: cards, win detection, draws and timers.

This package contains pure(ish) domain logic used by the session registry,
keeping transport concerns separated from core game mechanics.
"""
