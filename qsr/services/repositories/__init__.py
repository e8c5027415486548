"""Supabase repositories."""
from .base import BaseRepository
from .restaurant_repo import RestaurantRepository

__all__ = ["BaseRepository", "RestaurantRepository"]
