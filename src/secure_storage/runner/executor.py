# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Executor for running a batch of storage operations.

Orchestrates the full execution flow:
1. Create the local store from configuration (client mode)
2. Build the execution context
3. Build storage from the preset and overrides
4. Run every operation in order
5. Return structured results
"""

from __future__ import annotations

from typing import Any

import httpx

from secure_storage._internal.cookie_header import decode_value
from secure_storage.adapters.base import StorageAdapter
from secure_storage.config import CookieOptions
from secure_storage.context import ClientContext, HeaderResponse, RequestContext
from secure_storage.exceptions import PolicyConfigError
from secure_storage.factory import Storage, create_storage_from_preset
from secure_storage.policy import KeyPatternMatcher
from secure_storage.result import StorageResult
from secure_storage.stores import InMemoryLocalStore, LocalStore, SQLiteLocalStore

from .schema import (
    LocalStoreConfigSchema,
    OperationResultSchema,
    OperationSchema,
    PolicyOverridesSchema,
    RunnerInput,
    RunnerOutput,
)


class ExecutionError(Exception):
    """Raised when the batch cannot be set up."""

    pass


class Executor:
    """Executes a batch of storage operations.

    Responsibilities:
    - Create the local store from configuration
    - Build a client or server context
    - Run each operation and translate its StorageResult

    Pass a custom store to the constructor to override store creation.

    Example:
        executor = Executor()
        output = await executor.execute(input_data)

        # For testing with a prepared store:
        executor = Executor(local_store=InMemoryLocalStore())
    """

    def __init__(self, local_store: LocalStore | None = None) -> None:
        self._injected_store = local_store

    async def execute(self, input_data: RunnerInput) -> RunnerOutput:
        """Execute the batch, never raising.

        Setup errors are returned as a failed RunnerOutput; failures of
        individual operations are reported per operation.
        """
        try:
            return await self._execute_internal(input_data)
        except PolicyConfigError as e:
            return RunnerOutput(success=False, error=str(e), error_type="PolicyConfigError")
        except ExecutionError as e:
            return RunnerOutput(success=False, error=str(e), error_type="ExecutionError")
        except Exception as e:
            return RunnerOutput(success=False, error=str(e), error_type=type(e).__name__)

    async def _execute_internal(self, input_data: RunnerInput) -> RunnerOutput:
        store: LocalStore | None = None
        owns_store = False
        if input_data.mode == "client":
            store = self._injected_store or self._create_store(input_data.local)
            owns_store = self._injected_store is None

        try:
            context = self._build_context(input_data, store)
            storage = create_storage_from_preset(
                input_data.preset,
                context,
                self._build_overrides(input_data.overrides),
            )

            results = [await self._run_operation(storage, op) for op in input_data.operations]

            output = RunnerOutput(
                success=all(r.success for r in results),
                results=results,
                policy=storage.cookies.policy.export(),
            )
            if isinstance(context, RequestContext):
                if isinstance(context.response, HeaderResponse):
                    output.set_cookie = context.response.set_cookie_headers
            elif context.cookies is not None:
                output.cookies = self._dump_jar(context.cookies)
            return output
        finally:
            if owns_store and isinstance(store, SQLiteLocalStore):
                await store.close()

    def _create_store(self, config: LocalStoreConfigSchema) -> LocalStore:
        if config.type == "sqlite":
            if not config.path:
                raise ExecutionError("SQLite store requires 'path' configuration")
            return SQLiteLocalStore(config.path, origin=config.origin)
        return InMemoryLocalStore()

    def _build_context(
        self, input_data: RunnerInput, store: LocalStore | None
    ) -> ClientContext | RequestContext:
        if input_data.mode == "server":
            return RequestContext(cookie_header=input_data.cookie_header, response=HeaderResponse())
        return ClientContext(
            cookies=httpx.Cookies(input_data.cookies),
            local_store=store,
            domain=input_data.domain,
        )

    def _build_overrides(self, overrides: PolicyOverridesSchema) -> dict[str, Any]:
        result: dict[str, Any] = overrides.model_dump(exclude_none=True, exclude={"encrypt_patterns"})
        if overrides.encrypt_patterns is not None:
            result["should_encrypt_key"] = KeyPatternMatcher(overrides.encrypt_patterns)
        return result

    async def _run_operation(self, storage: Storage, op: OperationSchema) -> OperationResultSchema:
        adapter: StorageAdapter = storage.cookies if op.adapter == "cookies" else storage.local

        if op.op != "clear" and not op.key:
            return OperationResultSchema(
                adapter=op.adapter,
                op=op.op,
                success=False,
                error="Operation requires a 'key'",
                error_type="ExecutionError",
            )

        options = CookieOptions(**op.options.model_dump(exclude_none=True)) if op.options else None

        result: StorageResult[Any]
        if op.op == "get":
            result = await adapter.get(op.key)
        elif op.op == "set":
            result = await adapter.set(op.key, op.value, options, op.force_encrypt)
        elif op.op == "remove":
            result = await adapter.remove(op.key, options)
        else:
            result = await adapter.clear()

        return OperationResultSchema(
            adapter=op.adapter,
            op=op.op,
            key=op.key,
            success=result.success,
            value=result.value,
            error=str(result.error) if result.error else "",
            error_type=type(result.error).__name__ if result.error else "",
        )

    @staticmethod
    def _dump_jar(cookies: httpx.Cookies) -> dict[str, str]:
        return {c.name: decode_value(c.value) for c in cookies.jar if c.value is not None}
