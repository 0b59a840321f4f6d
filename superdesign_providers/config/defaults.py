"""superdesign_providers.config.defaults
====================================

Small, stable default values used across the package. They can be
overridden through settings or adapter parameters but give sensible
fallbacks for local development and tests.

This module imports nothing from the rest of the package so any layer can
depend on it without cycles.
"""

from __future__ import annotations

# ---- Settings store ----
# Scope key under which the host keeps provider settings.
SETTINGS_SCOPE = "superdesign"
# Environment variable naming an optional JSON/YAML settings file.
SETTINGS_FILE_ENV = "SUPERDESIGN_SETTINGS_FILE"

# Setting names read from the store.
GEMINI_API_KEY_SETTING = "geminiApiKey"  # pragma: allowlist secret - setting name, not a secret
GEMINI_MODEL_SETTING = "geminiModel"
MISTRAL_API_KEY_SETTING = "mistralApiKey"  # pragma: allowlist secret - setting name, not a secret
MISTRAL_MODEL_SETTING = "mistralModel"

# ---- Working directory ----
# Project-local hidden directory used as the provider working directory.
WORKSPACE_DIR_NAME = ".superdesign"
# Prefix of the temp-directory fallback; the provider key is appended.
TEMP_DIR_PREFIX = "superdesign-"

# ---- Gemini ----
GEMINI_DEFAULT_MODEL = "gemini-1.5-pro-latest"
GEMINI_DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com"

# ---- Mistral ----
MISTRAL_DEFAULT_MODEL = "mistral-large-latest"
MISTRAL_DEFAULT_BASE_URL = "https://api.mistral.ai"
MISTRAL_DEFAULT_TEMPERATURE = 0.7

__all__ = [
    "SETTINGS_SCOPE",
    "SETTINGS_FILE_ENV",
    "GEMINI_API_KEY_SETTING",
    "GEMINI_MODEL_SETTING",
    "MISTRAL_API_KEY_SETTING",
    "MISTRAL_MODEL_SETTING",
    "WORKSPACE_DIR_NAME",
    "TEMP_DIR_PREFIX",
    "GEMINI_DEFAULT_MODEL",
    "GEMINI_DEFAULT_BASE_URL",
    "MISTRAL_DEFAULT_MODEL",
    "MISTRAL_DEFAULT_BASE_URL",
    "MISTRAL_DEFAULT_TEMPERATURE",
]
