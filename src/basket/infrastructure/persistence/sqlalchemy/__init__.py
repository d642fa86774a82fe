"""SQLAlchemy persistence for carts."""
