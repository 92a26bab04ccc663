# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Runner submodule for executing storage operations from JSON.

Usage:
    python -m secure_storage.runner < input.json > output.json

Exports:
    Executor: Runs a batch of operations against freshly built storage
    RunnerInput: Input schema
    RunnerOutput: Output schema
"""

from .executor import ExecutionError, Executor
from .schema import (
    CookieOptionsSchema,
    LocalStoreConfigSchema,
    OperationResultSchema,
    OperationSchema,
    PolicyOverridesSchema,
    RunnerInput,
    RunnerOutput,
)

__all__ = [
    "CookieOptionsSchema",
    "ExecutionError",
    "Executor",
    "LocalStoreConfigSchema",
    "OperationResultSchema",
    "OperationSchema",
    "PolicyOverridesSchema",
    "RunnerInput",
    "RunnerOutput",
]
