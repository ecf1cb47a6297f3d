# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the DevNet API:
# - test_subdocuments.py: Embedded list editing (likes, comments, entries)
# - test_profile_fields.py: Profile field builder
# - test_security.py: Passwords and access tokens
# - test_mongo_client.py: MongoStore over mongomock
# - test_services.py: Profile upsert and post services
# - test_models.py: Request model validation
# - test_github_client.py: GitHub client with a mock transport
# - test_api_*.py: HTTP endpoints through TestClient
#
# Run tests with: pytest
# =============================================================================
