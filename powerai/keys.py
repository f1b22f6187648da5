"""Registry key layout, agent URLs and agent stream line parsing."""

from __future__ import annotations

AGENT_INSTANCE_PREFIX_KEY = "/service/instance/"
SYSTEM_CONFIG_PREFIX_KEY = "/system/config/_internal_"
AGENT_CONFIG_PREFIX_KEY = "/agent/config"
DECISION_CONFIG_CLASSIFY = "_decision_config_"
GENERAL_CONFIG_CLASSIFY = "_general_config_"
AGENT_LIST_KEY = "agent_list"
AGENT_DECISION_INTENTION_KEY = "intention_category"
POWER_AI_DECISION = "power-ai-decision"
POWER_AI_AGENT_SENDBOX = "power-ai-agent-sendbox"

_DEFAULT_ENTERPRISE = "default"
_DONE_MARKER = "[Done]"
_DATA_PREFIX = "data:"


def _agent_path(agent_code: str) -> str:
    return agent_code.replace("-", "/")


def service_instance_prefix_key(agent_code: str) -> str:
    """Return ``/service/instance/{agent_code}``."""
    return f"{AGENT_INSTANCE_PREFIX_KEY}{agent_code}"


def service_instance_full_key(agent_code: str, ip: str, port: str) -> str:
    """Return ``/service/instance/{agent_code}/{ip}:{port}``."""
    return f"{AGENT_INSTANCE_PREFIX_KEY}{agent_code}/{ip}:{port}"


def system_config_full_key(enterprise_id: str, key: str) -> str:
    """Return the system config key; an empty enterprise id means ``default``."""
    enterprise_id = enterprise_id or _DEFAULT_ENTERPRISE
    return f"{SYSTEM_CONFIG_PREFIX_KEY}/{enterprise_id}/{key}"


def agent_config_full_key(classify: str, enterprise_id: str, code: str, key: str) -> str:
    """Return an agent config key; an empty enterprise id means ``default``."""
    enterprise_id = enterprise_id or _DEFAULT_ENTERPRISE
    return f"{AGENT_CONFIG_PREFIX_KEY}/{classify}/{code}/{enterprise_id}/{key}"


def agent_general_config_full_key(enterprise_id: str, agent_code: str, key: str) -> str:
    """Return an agent's general config key."""
    return agent_config_full_key(GENERAL_CONFIG_CLASSIFY, enterprise_id, agent_code, key)


def agent_decision_config_full_key(enterprise_id: str, agent_code: str, key: str) -> str:
    """Return an agent's decision config key."""
    return agent_config_full_key(DECISION_CONFIG_CLASSIFY, enterprise_id, agent_code, key)


def agent_decision_prefix_key() -> str:
    """Return the prefix under which all decision configs live."""
    return f"{AGENT_CONFIG_PREFIX_KEY}/{DECISION_CONFIG_CLASSIFY}"


def agent_config_prefix_key(code: str) -> str:
    """Return the prefix under which an agent's general configs live."""
    return f"{AGENT_CONFIG_PREFIX_KEY}/{GENERAL_CONFIG_CLASSIFY}/{code}"


def system_config_prefix_key() -> str:
    """Return the prefix under which system configs live."""
    return SYSTEM_CONFIG_PREFIX_KEY


def agent_send_msg_url(addr: str, agent_code: str) -> str:
    """Return the ``send_msg`` endpoint URL of an agent at ``addr``."""
    return f"http://{addr}/{_agent_path(agent_code)}/send_msg"


def agent_proxy_url(addr: str, agent_code: str, method_name: str) -> str:
    """Return the URL of ``method_name`` on an agent at ``addr``."""
    return f"http://{addr}/{_agent_path(agent_code)}/{method_name}"


def parse_agent_response(data: bytes | str) -> tuple[str, bool]:
    """Parse one stream line into ``(payload, done)``.

    The line is stripped; ``[Done]`` marks the end of the stream, otherwise a
    leading ``data:`` is removed.
    """
    text = data.decode("utf-8", errors="replace") if isinstance(data, (bytes, bytearray)) else data
    text = text.strip()
    if text == _DONE_MARKER:
        return "", True
    if text.startswith(_DATA_PREFIX):
        text = text[len(_DATA_PREFIX):]
    return text, False