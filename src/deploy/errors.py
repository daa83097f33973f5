"""
Deploy errors - each carries the exit code the CLI should return.
"""


class DeployError(Exception):
    """Base class for KV deployment errors."""

    exit_code: int = 1


class KvConfigNotFound(DeployError):
    """Neither a named config under cloudflare/kvs nor a config path exists."""

    pass


class KvConfigError(DeployError):
    """The KV config file is malformed."""

    pass


class WranglerNotInstalled(DeployError):
    """The wrangler node package is missing from node_modules."""

    pass


class NamespaceNotFound(DeployError):
    """The namespace could not be found in wrangler's namespace list."""

    pass


class WranglerCommandFailed(DeployError):
    """A wrangler sub-command exited with a non-zero status."""

    def __init__(self, args: list[str], returncode: int, stderr: str = "") -> None:
        self.args_list = args
        self.exit_code = returncode
        self.stderr = stderr
        super().__init__(f"Command '{' '.join(args)}' failed with exit code {returncode}")
