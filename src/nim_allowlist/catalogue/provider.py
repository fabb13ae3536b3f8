"""Connection details for the provider entry the catalogue is registered under."""

DEFAULT_PROVIDER_NAME = "nvidia"
DEFAULT_PROVIDER_BASE_URL = "https://integrate.api.nvidia.com/v1"
DEFAULT_PROVIDER_API = "openai-completions"
