"""
Tests for reading supplier credentials from environment variables.
"""

import os
from unittest.mock import patch

from BomSourcer.utils.env_credentials import (
    get_supplier_credentials_from_env,
    get_supplier_config_from_env,
    list_available_env_credentials,
)


class TestEnvCredentials:

    def test_digikey_credentials(self):
        env = {"DIGIKEY_CLIENT_ID": "abc", "DIGIKEY_CLIENT_SECRET": " xyz "}
        with patch.dict(os.environ, env, clear=True):
            assert get_supplier_credentials_from_env("digikey") == {"client_id": "abc", "client_secret": "xyz"}

    def test_blank_values_ignored(self):
        with patch.dict(os.environ, {"MOUSER_API_KEY": "   "}, clear=True):
            assert get_supplier_credentials_from_env("mouser") is None

    def test_sandbox_flag(self):
        for raw, expected in (("true", True), ("1", True), ("YES", True), ("false", False), ("", False)):
            with patch.dict(os.environ, {"DIGIKEY_CLIENT_SANDBOX": raw}, clear=True):
                assert get_supplier_config_from_env("digikey") == {"sandbox": expected}

    def test_non_digikey_config_empty(self):
        with patch.dict(os.environ, {}, clear=True):
            assert get_supplier_config_from_env("mouser") == {}

    def test_list_available_never_exposes_values(self):
        env = {"MOUSER_API_KEY": "secret-key", "DIGIKEY_CLIENT_ID": "id"}
        with patch.dict(os.environ, env, clear=True):
            available = list_available_env_credentials()

        assert available == {"digikey": ["client_id"], "mouser": ["api_key"]}
        assert "secret-key" not in str(available)
