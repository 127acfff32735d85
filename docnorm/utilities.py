import inspect
import os
from datetime import datetime, timezone

import psutil
from rich import print as _print

# logType -> (before, after, style)
LOG_TYPES = {
    'SUCCESS': ('^^^', '^^^', 'green'),
    'FAILURE': ('###', '###', 'red bold'),
    'STATE': ('~~~', '~~~', 'cyan'),
    'INFO': ('---', '---', 'blue'),
    'IMPORTANT': ('===', '===', 'magenta'),
    'CRITICAL': ('***', '***', 'red bold'),
    'EXCEPTION': ('!!!', '!!!', 'red bold'),
    'WARNING': ('(((', ')))', 'yellow'),
    'DEBUG': ('[[[', ']]]', 'white'),
    'ATTEMPT': ('???', '???', 'cyan'),
    'STARTING': ('>>>', '>>>', 'green'),
    'PROGRESS': ('vvv', 'vvv', 'blue'),
    'COMPLETED': ('<<<', '<<<', 'green'),
}

DEBUG_ENV_VAR = "DOCNORM_DEBUG"


def debug_enabled() -> bool:
    """True when DEBUG lines should be printed (DOCNORM_DEBUG set to a non-empty, non-zero value)."""
    return os.environ.get(DEBUG_ENV_VAR, "").strip() not in ("", "0", "false", "no")


def Print(logType: str, message: str) -> None:
    """
    Prints a log message with timestamp, calling function name, symbols wrapping the logType, and the message.

    DEBUG messages are dropped unless DOCNORM_DEBUG is set, since the
    normalization path logs every stage of every call.
    """
    logTypeUpper = logType.upper()
    if logTypeUpper == 'DEBUG' and not debug_enabled():
        return

    try:
        timestamp = datetime.now(tz=timezone.utc).isoformat(timespec='microseconds')

        before_symbol, after_symbol, style = LOG_TYPES.get(logTypeUpper, ('', '', ''))
        formattedLogType = f"{before_symbol} {logTypeUpper} {after_symbol}".strip()
        if style:
            formattedLogType = f"[{style}]{formattedLogType}[/{style}]"

        # Walk past Print itself to the function that logged
        frame = inspect.currentframe()
        caller = frame.f_back if frame is not None else None
        function_name = caller.f_code.co_name if caller is not None else '<unknown>'

        output_line = f"{timestamp} {formattedLogType} {function_name.ljust(32)} {message}"
        _print(output_line)

    except Exception as e:
        print(f"Something went wrong when attempting to print.\nError: {e}")


def resource_usage() -> str:
    """
    Returns a string with the CPU usage and resident memory of the current process.
    """
    current_process = psutil.Process(os.getpid())
    cpu_usage = current_process.cpu_percent(interval=None)
    memory_usage_mb = current_process.memory_info().rss / (1024 ** 2)
    return f"CPU Usage: {cpu_usage}%, Process Memory Usage: {memory_usage_mb:.2f} MB"
