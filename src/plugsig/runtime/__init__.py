# Copyright 2026 plugsig Contributors
# SPDX-License-Identifier: Apache-2.0

"""Plugin runtime: host-facing dispatch of calls to a handler."""

from plugsig.runtime.plugin import Handler, Plugin, serve_plugin

__all__ = [
    "Handler",
    "Plugin",
    "serve_plugin",
]
