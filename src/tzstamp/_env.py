################################################################################
# © Copyright 2024 Zapata Computing Inc.
################################################################################

"""Global constants used to access environment variables."""

import os
import typing as t

TZSTAMP_VERBOSE = "TZSTAMP_VERBOSE"
"""
If set to a truthy value, the ``tzstamp`` logger prints debug records (rejected
parse input, synthesized offset zones) to stderr.
Example:
    TZSTAMP_VERBOSE=1
"""


def _is_truthy(env_var_value: t.Optional[str]):
    if env_var_value is None:
        return False

    return env_var_value.lower() in {"1", "true"}


def flag_set(env_var_name: str) -> bool:
    value = os.getenv(env_var_name)
    return _is_truthy(value)
