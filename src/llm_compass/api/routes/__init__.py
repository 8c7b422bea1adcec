"""API routers."""
from .health import HealthRouter
from .info import InfoRouter
from .models import ModelsRouter
from .recommend import RecommendRouter

__all__ = ["HealthRouter", "InfoRouter", "ModelsRouter", "RecommendRouter"]
