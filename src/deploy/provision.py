"""
KV namespace provisioning - create the namespace if needed, then seed it.
"""

import logging

from .config import KvConfig
from .errors import NamespaceNotFound
from .wrangler import DUMMY_WORKER_NAME, Wrangler

logger = logging.getLogger(__name__)


def find_namespace_id(namespaces: list[dict], name: str) -> str | None:
    """
    Find the id of a namespace by title.

    Matches the bare name as well as the "<worker>-<name>" title wrangler
    gives namespaces created through the dummy worker.
    """
    titles = {name, f"{DUMMY_WORKER_NAME}-{name}"}
    for namespace in namespaces:
        if namespace.get("title") in titles:
            return namespace.get("id")
    return None


def deploy_kv(config: KvConfig, wrangler: Wrangler) -> str:
    """
    Deploy a KV namespace and fill it with the configured data.

    Partial insertions are not rolled back when a put fails.

    Returns:
        The namespace id

    Raises:
        WranglerCommandFailed: If any wrangler sub-command fails
        NamespaceNotFound: If the namespace is missing after creation
    """
    print("")
    print("========")
    print(f"Deploying KV: {config.name}")

    namespace_id = find_namespace_id(wrangler.list_namespaces(), config.name)

    if namespace_id is None:
        logger.info("Creating KV namespace %s", config.name)
        wrangler.create_namespace(config.name)
        namespace_id = find_namespace_id(wrangler.list_namespaces(), config.name)

    if namespace_id is None:
        raise NamespaceNotFound(f"KV namespace '{config.name}' not found after creation")

    for key, value in config.data.items():
        print(f"Adding key '{key}' to the KV.")
        wrangler.put_key(namespace_id, key, value)

    print("========")
    return namespace_id
