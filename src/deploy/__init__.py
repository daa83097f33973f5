"""KV deployment tool - provision and seed Cloudflare KV namespaces via wrangler."""

from .config import KvConfig, load_kv_config, locate_kv_config, parse_kv_config
from .errors import DeployError
from .provision import deploy_kv, find_namespace_id
from .wrangler import Wrangler

__all__ = [
    "DeployError",
    "KvConfig",
    "Wrangler",
    "deploy_kv",
    "find_namespace_id",
    "load_kv_config",
    "locate_kv_config",
    "parse_kv_config",
]
