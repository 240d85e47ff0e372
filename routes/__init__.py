"""Route registration package."""

from .api_routes import register_api_routes
from .error_handlers import register_error_handlers
from .scouting_routes import register_scouting_routes
from .season_routes import register_season_routes

__all__ = [
    "register_api_routes",
    "register_error_handlers",
    "register_scouting_routes",
    "register_season_routes",
]
