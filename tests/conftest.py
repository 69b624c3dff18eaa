"""Pytest bootstrap configuration.

Ensure environment variables are set before test collection and module
imports that depend on application settings.
"""
import os

os.environ.setdefault("DEBUG", "false")
os.environ.setdefault("DATABASE__URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ADMIN_TIMEZONE", "UTC")
os.environ.setdefault("DEFAULT_LOCALE", "en_US")
os.environ.setdefault("ADYEN__API_KEY_TEST", "test_api_key")
os.environ.setdefault("ADYEN__MERCHANT_ACCOUNT", "TestMerchantECOM")
os.environ.setdefault("ADYEN__ENVIRONMENT", "test")
