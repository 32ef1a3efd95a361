"""Turn per-call access overrides into concrete headers and a URL."""

from __future__ import annotations

from dataclasses import dataclass

from llm_procedures.errors import ConfigurationError
from llm_procedures.settings import DEFAULT_API_HOST, ProviderDefaults
from llm_procedures.types import AccessConfig


@dataclass(frozen=True)
class ResolvedAccess:
    """Outbound headers and absolute URL for a single request."""

    headers: dict[str, str]
    url: str


def resolve_access(access: AccessConfig, api_path: str, defaults: ProviderDefaults) -> ResolvedAccess:
    """Merge caller overrides with the defaults.

    Raises ``ConfigurationError`` when neither side provides an API key; no
    request is ever attempted without one.
    """
    api_key = access.oai_key or defaults.openai_api_key
    if not api_key:
        raise ConfigurationError(
            "Missing OpenAI API Key. Add it on the client or in the server environment."
        )

    organization = access.oai_org or defaults.openai_api_org_id
    helicone_key = access.heli_key or defaults.helicone_api_key

    host = access.oai_host or defaults.openai_api_host or DEFAULT_API_HOST
    if not host.startswith("http"):
        host = f"https://{host}"
    if host.endswith("/") and api_path.startswith("/"):
        host = host[:-1]

    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }
    if organization:
        headers["OpenAI-Organization"] = organization
    if helicone_key:
        headers["Helicone-Auth"] = f"Bearer {helicone_key}"

    return ResolvedAccess(headers=headers, url=host + api_path)
