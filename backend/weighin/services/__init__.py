"""Domain services: leaderboard, weight inference and image lookup.

These hold the logic behind the HTTP routes and receive their collaborators
(database handle, provider clients) through their constructors, keeping
transport concerns out of the rules themselves.
"""
from .images import ImageService
from .leaderboard import LeaderboardService
from .weight import WeightService

__all__ = ['ImageService', 'LeaderboardService', 'WeightService']
