"""
Thin wrapper over the ``wrangler`` CLI (run through ``npx``).

Every call raises WranglerCommandFailed with the sub-command's exit
code when it fails; nothing is retried.
"""

import json
import logging
import subprocess
import tempfile
from pathlib import Path

from .errors import DeployError, WranglerCommandFailed, WranglerNotInstalled

logger = logging.getLogger(__name__)

# Worker name used in the throw-away wrangler.toml when creating a namespace.
# Wrangler prefixes the namespace title with it: "<worker>-<name>".
DUMMY_WORKER_NAME = "kv"


class Wrangler:
    """Runs wrangler sub-commands from a node project directory."""

    def __init__(self, project_dir: Path, npx: str = "npx") -> None:
        self.project_dir = project_dir
        self.npx = npx

    def ensure_installed(self) -> None:
        """
        Raises:
            WranglerNotInstalled: If node_modules/wrangler is missing
        """
        if not (self.project_dir / "node_modules" / "wrangler").exists():
            raise WranglerNotInstalled(
                "Could not locate the node package 'wrangler'. "
                "Please install it and run this script again."
            )

    def list_namespaces(self) -> list[dict]:
        """Return the deployed KV namespaces as ``[{"id": ..., "title": ...}]``."""
        output = self._run("kv:namespace", "list")
        try:
            namespaces = json.loads(output)
        except json.JSONDecodeError as e:
            raise DeployError(f"Unexpected output from wrangler kv:namespace list: {e}") from e
        if not isinstance(namespaces, list):
            raise DeployError("Unexpected output from wrangler kv:namespace list: not a list")
        return namespaces

    def create_namespace(self, name: str) -> None:
        """Create a namespace using a dummy worker config."""
        with tempfile.TemporaryDirectory(suffix="-wrangler") as tmp:
            config_path = Path(tmp) / "wrangler.toml"
            config_path.write_text(f'name = "{DUMMY_WORKER_NAME}"\n', encoding="utf-8")
            self._run("kv:namespace", "create", "--config", str(config_path), name)

    def put_key(self, namespace_id: str, key: str, value: str) -> None:
        self._run("kv:key", "put", f"--namespace-id={namespace_id}", key, value)

    def _run(self, *args: str) -> str:
        command = [self.npx, "wrangler", *args]
        logger.debug("Running %s", " ".join(command[:4]))

        result = subprocess.run(
            command,
            cwd=self.project_dir,
            capture_output=True,
            text=True,
            check=False,
        )

        if result.returncode != 0:
            logger.error("wrangler failed (%s): %s", result.returncode, result.stderr.strip())
            raise WranglerCommandFailed(command, result.returncode, result.stderr)

        return result.stdout
