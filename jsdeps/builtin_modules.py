"""Node.js builtin module names."""

# Taken from https://github.com/sindresorhus/builtin-modules
BUILTIN_MODULES = frozenset(
    {
        "assert",
        "async_hooks",
        "buffer",
        "child_process",
        "cluster",
        "console",
        "constants",
        "crypto",
        "dgram",
        "dns",
        "domain",
        "events",
        "fs",
        "http",
        "http2",
        "https",
        "inspector",
        "module",
        "net",
        "os",
        "path",
        "perf_hooks",
        "process",
        "punycode",
        "querystring",
        "readline",
        "repl",
        "stream",
        "string_decoder",
        "timers",
        "tls",
        "trace_events",
        "tty",
        "url",
        "util",
        "v8",
        "vm",
        "wasi",
        "worker_threads",
        "zlib",
    }
)

BUILTIN_SCHEME = "node:"
BUILTIN_TYPES_PACKAGE = "@types/node"


def is_builtin_module(identifier: str) -> bool:
    """Return True for ``fs``, ``fs/promises`` or ``node:anything``."""
    if identifier.startswith(BUILTIN_SCHEME):
        return True
    return identifier.split("/", 1)[0] in BUILTIN_MODULES
