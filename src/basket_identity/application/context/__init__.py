from basket_identity.application.context.identity import Identity

__all__ = ["Identity"]
