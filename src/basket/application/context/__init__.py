from basket.application.context.app_context import AppContext

__all__ = ["AppContext"]
