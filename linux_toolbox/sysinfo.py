"""One-shot summary of the local machine."""

import platform

import psutil


def _os_name() -> str:
    try:
        return platform.freedesktop_os_release()["PRETTY_NAME"]
    except (OSError, KeyError, AttributeError):
        return f"{platform.system()} {platform.release()}".strip() or "Unknown OS"


def _cpu_name() -> str:
    try:
        with open("/proc/cpuinfo", "r", encoding="utf-8") as f:
            for line in f:
                if line.startswith("model name"):
                    return line.split(":", 1)[1].strip()
    except OSError:
        pass
    return platform.processor() or "Unknown CPU"


def get_system_info() -> str:
    """Return "OS: ...", "CPU: ..." and "Memory: ..." lines."""
    memory = psutil.virtual_memory()
    used_mb = (memory.total - memory.available) // (1024 * 1024)
    total_mb = memory.total // (1024 * 1024)
    return "\n".join([
        f"OS: {_os_name()}",
        f"CPU: {_cpu_name()}",
        f"Memory: {used_mb} MB / {total_mb} MB",
    ])
