from .service import PlansService

__all__ = ["PlansService"]
