import pytest

pytestmark = pytest.mark.unit


class TestSensitiveDataMasking:
    def test_password_masked(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "data": "password='s3cret123'"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "s3cret123" not in result["data"]
        assert "***MASKED***" in result["data"]

    def test_token_masked(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "header": "token=abc123xyz"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "abc123xyz" not in result["header"]
        assert "***MASKED***" in result["header"]

    def test_bearer_header_masked(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "raw": "Authorization: Bearer eyJhbGciOi.x.y"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "eyJhbGciOi" not in result["raw"]

    def test_api_key_masked(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "raw": "x-api-key: super-secret-key"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "super-secret-key" not in result["raw"]

    def test_sensitive_keys_masked(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "password": "hunter2", "token": "abc"}
        result = mask_sensitive_data(None, None, event_dict)
        assert result["password"] == "***MASKED***"
        assert result["token"] == "***MASKED***"

    def test_non_sensitive_data_unchanged(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "product.created", "product_id": "abc", "sku": "SKU-1"}
        result = mask_sensitive_data(None, None, event_dict)
        assert result["product_id"] == "abc"
        assert result["sku"] == "SKU-1"
        assert result["event"] == "product.created"
