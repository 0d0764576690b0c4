"""
worldgen Test Suite

Test structure:
- unit/: Test components in isolation with mocks
- integration/: Test the full pipeline with mock generation clients
- e2e/: Real LLM tests (marked @pytest.mark.slow)
- mocks/: Mock implementations for testing
"""
