# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the FileNest API:
# - test_models.py: Unit tests for Pydantic model validation
# - test_credential_codec.py / test_token_service.py: Identity and tokens
# - test_path_mediator.py / test_directory_lister.py: Filesystem core
# - test_auth_service.py / test_file_service.py: Service flows
# - test_api.py: Integration tests for API endpoints
#
# Run tests with: poetry run pytest
# =============================================================================
