# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the business logic behind the routes:
# - models/: Pydantic schemas for request validation
# - services/: User, profile and post operations over the MongoStore
#
# Services take their store in the constructor; they never open connections
# themselves.
# =============================================================================
