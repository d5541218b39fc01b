"""
Exit codes for pmon.

Usage errors exit with 2, matching getopt-style tools and click's own
usage-error code.
"""

# Success, including termination by signal after the summary is printed
SUCCESS = 0

# General error (unspecified)
ERROR_GENERAL = 1

# Invalid arguments, invalid configuration, or unusable output path
ERROR_INVALID_ARGS = 2


def get_exit_code_name(code: int) -> str:
    """Get the name of an exit code for display purposes."""
    code_names = {
        SUCCESS: "SUCCESS",
        ERROR_GENERAL: "ERROR_GENERAL",
        ERROR_INVALID_ARGS: "ERROR_INVALID_ARGS",
    }
    return code_names.get(code, f"UNKNOWN({code})")


def get_exit_code_description(code: int) -> str:
    """Get a human-readable description of an exit code."""
    descriptions = {
        SUCCESS: "Timer stopped normally",
        ERROR_GENERAL: "A general error occurred",
        ERROR_INVALID_ARGS: "Invalid arguments or configuration",
    }
    return descriptions.get(code, "Unknown error")
