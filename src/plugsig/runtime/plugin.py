# Copyright 2026 plugsig Contributors
# SPDX-License-Identifier: Apache-2.0

"""Runtime side of a plugin: the object a host registers and calls into.

The host owns the transport. It asks the plugin for its signatures once,
then delivers calls one at a time. The plugin binds each call to a typed
command value and hands it to a single handler.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from plugsig.compiler.binding import Command
from plugsig.compiler.build import CompiledSchema, compile_schema
from plugsig.model.call import EvaluatedCall
from plugsig.model.schema import CommandSchema
from plugsig.model.signature import SignatureDescriptor

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

Handler = Callable[[Command, Any], Any]


class Plugin:
    """Dispatches host calls through a compiled schema to a handler.

    Calls are served synchronously in the order the host delivers them. A
    :class:`~plugsig.model.call.CallError` from binding and any exception
    raised by the handler propagate to the host unchanged.
    """

    def __init__(self, compiled: CompiledSchema, handler: Handler) -> None:
        self._compiled = compiled
        self._handler = handler

    @property
    def compiled(self) -> CompiledSchema:
        return self._compiled

    def signature(self) -> list[SignatureDescriptor]:
        """Return the signature list for host registration."""
        return list(self._compiled.signatures)

    def run(self, name: str, call: EvaluatedCall, input: Any = None) -> Any:
        """Bind one call and run the handler on it.

        Args:
            name: Command name the host resolved the call to.
            call: The evaluated call arguments.
            input: The pipeline input value, passed to the handler as-is.

        Returns:
            Whatever the handler returns.
        """
        logger.debug(
            "Running '%s' with %d positional and %d named argument(s)",
            name,
            len(call.positional),
            len(call.named),
        )
        command = self._compiled.parse(name, call)
        return self._handler(command, input)


def serve_plugin(
    schema: CommandSchema | CompiledSchema,
    handler: Handler,
    host: Callable[[Plugin], Any],
) -> Any:
    """Compile *schema* if needed, wrap it with *handler*, and hand it to *host*.

    Args:
        schema: A command schema, or an already compiled one.
        handler: Called as ``handler(command, input)`` once per accepted call.
        host: Serves the plugin, e.g. a transport loop. Its return value is
            returned from this function.

    Raises:
        CompilerError: If *schema* does not compile. The host is not
            contacted in that case.
    """
    compiled = schema if isinstance(schema, CompiledSchema) else compile_schema(schema)
    plugin = Plugin(compiled, handler)
    logger.debug("Serving plugin with commands: %s", ", ".join(compiled.command_names))
    return host(plugin)
